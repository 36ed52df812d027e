from .config import *  # noqa: F401,F403

DEBUG = False
TESTING = True

# Run follow-up tasks inline so assertions see their effects.
INLINE_TASKS = True
