"""Google identity boundary."""

from brainforge.boundary.google.oauth_client import GoogleIdentity, GoogleTokenVerifier

__all__ = ["GoogleIdentity", "GoogleTokenVerifier"]
