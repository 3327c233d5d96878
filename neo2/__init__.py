import logging

__version__ = "0.1"

rpc_logger = logging.getLogger("neo2.rpc")
