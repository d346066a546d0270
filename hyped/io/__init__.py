"""Peripheral interfaces and their Linux implementations."""