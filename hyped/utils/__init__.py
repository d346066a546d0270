"""Hardware-free stand-ins for testing and development."""