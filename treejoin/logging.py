"""
Package logger. The library never configures handlers, this is left to the
application.
"""

import logging

logger = logging.getLogger("treejoin")
