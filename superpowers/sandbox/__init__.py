"""Sandboxed execution of user-authored scripts."""

from superpowers.sandbox.executor import ERROR_PREFIX, ScriptSandbox, parse_script_params
from superpowers.sandbox.policy import ScriptPolicyError, validate_script
from superpowers.sandbox.runtime import ALLOWED_MODULES, MISSING_MAIN_MESSAGE

__all__ = [
    "ScriptSandbox",
    "parse_script_params",
    "ERROR_PREFIX",
    "ALLOWED_MODULES",
    "MISSING_MAIN_MESSAGE",
    "ScriptPolicyError",
    "validate_script",
]
