"""Disabled database query tool."""

import logging

from pydantic import BaseModel

from superpowers.core.tool import Tool

logger = logging.getLogger(__name__)

DISABLED_MESSAGE = "Database queries are disabled. This tool is not available."


class QueryDbInput(BaseModel):
    """Input for query_db - no parameters, the tool is disabled."""

    pass


def query_db() -> str:
    logger.info("Calling tool query_db")
    return DISABLED_MESSAGE


query_db_tool = Tool(
    name="query_db",
    description="Execute a database query. (Disabled - this tool is not available.)",
    function=query_db,
    input_schema=QueryDbInput,
)
