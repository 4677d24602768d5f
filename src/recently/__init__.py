"""recently - run commands against files changed in recent git history."""

from recently.main import lint_recently
from recently.options import RunOptions

__version__ = "0.4.0"

__all__ = ["RunOptions", "__version__", "lint_recently"]
