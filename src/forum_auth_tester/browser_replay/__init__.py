"""Browser replay exports."""

from .login_page_driver import (
    BrowserCaseAborted,
    LoginPageReplayer,
    build_browser_options,
    create_remote_driver,
)
from .marker_polling import MarkerTimeoutError, wait_for_marker

__all__ = [
    "BrowserCaseAborted",
    "LoginPageReplayer",
    "build_browser_options",
    "create_remote_driver",
    "MarkerTimeoutError",
    "wait_for_marker",
]
