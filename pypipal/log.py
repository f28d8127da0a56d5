import logging

logger = logging.getLogger("pypipal")
