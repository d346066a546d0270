"""Motor controller error and warning code handling."""