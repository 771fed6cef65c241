"""Source maps: compile parser output and map it back through a Sass map."""

import base64
import json

from cascada import compile

scss_map = {
    "version": 3,
    "sources": ["site.scss"],
    "names": [],
    "mappings": "AAEA;EACE",
    "sourcesContent": ["$c: red;\n\na {\n  color: $c;\n}\n"],
}
payload = base64.b64encode(json.dumps(scss_map).encode()).decode()
css = f"a {{\n  color: red;\n}}\n/*# sourceMappingURL=data:application/json;base64,{payload} */"


def position(line: int, column: int) -> dict:
    return {"start": {"line": line, "column": column}, "source": "site.css", "content": css}


# Same JSON shape a CSS parser produces.
tree = {
    "type": "stylesheet",
    "stylesheet": {
        "rules": [
            {
                "type": "rule",
                "selectors": ["a"],
                "declarations": [
                    {
                        "type": "declaration",
                        "property": "color",
                        "value": "red",
                        "position": position(2, 3),
                    }
                ],
                "position": position(1, 1),
            }
        ]
    },
}

result = compile(tree, {"compress": True, "sourcemap": True})
print(result.code)
print(json.dumps(result.map, indent=2))

# The live generator answers position queries directly.
generator = compile(tree, {"sourcemap": "generator"}).map
print(generator.generated_positions_for("site.scss", 4))
