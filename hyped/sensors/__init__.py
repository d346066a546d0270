"""Mux sensor interface and the I2C multiplexer."""