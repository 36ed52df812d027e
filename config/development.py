from .config import *  # noqa: F401,F403
from .env import env_flag

DEBUG = env_flag("DEBUG", True)
