# --- Auth0 tenant defaults ---
DEFAULT_ACCOUNT = 'apex-inc'
DEFAULT_SCOPE = 'openid name user_id nickname email picture'
DEFAULT_TIMEOUT = 10.0  # seconds, applied to every outbound call


def auth0_url(account, path):
    """Builds an absolute URL on the tenant's auth0.com host."""
    return f"https://{account}.auth0.com{path}"
