"""
Shared Components

Constants, configuration, exceptions, logging and models used by the
transport.
"""
