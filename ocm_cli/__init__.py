"""
OCM CLI - Command line client for the OCM cluster management service.
"""

__version__ = "0.1.0"
__description__ = "Command line client for the OCM cluster management service"
