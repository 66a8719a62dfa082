"""
Core Subpackage

Ambient services for the command-line front end:
    - config.py: Settings from env vars and an optional YAML file
    - logging.py: Logger setup and JSON formatter
"""
