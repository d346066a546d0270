"""Navigation interface, constants and Kalman filtering."""