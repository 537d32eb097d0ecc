"""CLI listing the registered scene types and their options.

Usage:
    scenecompose scenes            # all types
    scenecompose scenes clip       # one type with full help text
"""

import argparse

from .registry import default_registry


def describe_scene(module, full=False) -> list[str]:
    """Format one scene type as printable lines."""
    lines = [f"{module.name}: {module.description}"]
    for opt in module.options:
        dirty = opt.invalidation.value
        lines.append(f"  {opt.name} = {opt.default!r}  [{dirty}]  {opt.desc}")
    if full and module.help:
        lines.append("")
        lines.extend(f"  {line}" for line in module.help.rstrip().splitlines())
    return lines


def main(args=None):
    parser = argparse.ArgumentParser(
        description="List available scene types.",
    )
    parser.add_argument(
        "name", nargs="?", default=None,
        help="Show full help for this scene type",
    )
    parsed = parser.parse_args(args)

    registry = default_registry()
    if parsed.name is not None:
        if parsed.name not in registry:
            parser.error(f"unknown scene type '{parsed.name}'. Valid: {registry.names()}")
        print("\n".join(describe_scene(registry.get(parsed.name), full=True)))
        return

    for module in registry:
        print("\n".join(describe_scene(module)))


if __name__ == "__main__":
    main()
