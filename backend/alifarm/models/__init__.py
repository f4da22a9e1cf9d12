"""
SQLAlchemy models. Importing this package registers every table on Base.metadata.
"""
from .accounts import *  # noqa: F401,F403
from .livestock import *  # noqa: F401,F403
from .investors import *  # noqa: F401,F403
