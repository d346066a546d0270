"""Interactive hardware debugger console and its command-line entry point."""