"""Error handling for huelog.

- ErrorCode: Classification of render failures
- RenderError/RenderException: Structured error and its raisable wrapper
- Result/Ok/Err: Write outcomes returned instead of raised
"""

from .errors import ErrorCode, RenderError, RenderException
from .result import Err, Ok, Result

__all__ = [
    "ErrorCode", "RenderError", "RenderException",
    "Result", "Ok", "Err",
]
