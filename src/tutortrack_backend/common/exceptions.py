"""
This file contains custom, application-specific exceptions.
"""

class EmailDeliveryError(Exception):
    """Raised when the email provider rejects or fails to accept a message."""
    pass

class OAuthExchangeError(Exception):
    """Raised when Google refuses the authorization code or the profile lookup fails."""
    pass
