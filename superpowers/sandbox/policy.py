"""Static checks applied to script source before it runs.

A script may only reach what its namespace hands it. Attribute lookups are
the way out of that namespace (``fn.__globals__``, ``obj.__class__``,
``gen.gi_frame.f_back``), so the source is rejected before execution when it
names any private, dunder or frame-inspection attribute.
"""

import ast

# Attributes that expose frames, code objects and tracebacks.
INTROSPECTION_PREFIXES = ("gi_", "cr_", "ag_", "f_", "tb_", "co_")


class ScriptPolicyError(ValueError):
    """Script source uses a construct that is not allowed in the sandbox."""


def _is_forbidden_attribute(name: str) -> bool:
    return name.startswith("_") or name.startswith(INTROSPECTION_PREFIXES)


def _check_node(node: ast.AST) -> None:
    if isinstance(node, ast.Attribute) and _is_forbidden_attribute(node.attr):
        raise ScriptPolicyError(
            f"Access to '{node.attr}' is not allowed in scripts (line {node.lineno})"
        )

    if isinstance(node, ast.Name) and node.id.startswith("__"):
        raise ScriptPolicyError(
            f"Use of '{node.id}' is not allowed in scripts (line {node.lineno})"
        )

    if isinstance(node, ast.alias) and node.name.rpartition(".")[2].startswith("_"):
        raise ScriptPolicyError(f"Import of '{node.name}' is not allowed in scripts")

    # `case Obj(__globals__=g)` looks attributes up by name
    if isinstance(node, ast.MatchClass):
        for attr in node.kwd_attrs:
            if _is_forbidden_attribute(attr):
                raise ScriptPolicyError(f"Access to '{attr}' is not allowed in scripts")


def validate_script(source: str, filename: str = "<script>") -> ast.Module:
    """Parse ``source`` and reject constructs that could leave the sandbox.

    Args:
        source: Script source code.
        filename: Name reported in syntax errors.

    Returns:
        The parsed module, ready to compile.

    Raises:
        SyntaxError: If the source does not parse.
        ScriptPolicyError: If the source uses a forbidden name or attribute.

    Example:
        tree = validate_script("def main(params):\\n    return params")
        code = compile(tree, "<script>", "exec")
    """
    tree = ast.parse(source, filename=filename, mode="exec")
    for node in ast.walk(tree):
        _check_node(node)
    return tree
