"""Infrastructure providers."""

# Import bases
from .cache import CacheProvider
from .facebook import FacebookProvider
from .google import GoogleProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .cache import ProdCacheProvider  # noqa: F401
from .facebook import ProdFacebookProvider  # noqa: F401
from .google import ProdGoogleProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "CacheProvider",
    "FacebookProvider",
    "GoogleProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdCacheProvider",
    "ProdFacebookProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
]
