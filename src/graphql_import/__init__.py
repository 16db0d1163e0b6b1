from graphql_import.logger import get_logger

__author__ = """graphql-import contributors"""
__version__ = "0.3.0"

log = get_logger("graphql_import")
