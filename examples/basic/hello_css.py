"""Compile a stylesheet tree to CSS, readable and compressed."""

from cascada import Declaration, Rule, Stylesheet, compile

sheet = Stylesheet(
    rules=(
        Rule(selectors=("a",), declarations=(Declaration(property="color", value="red"),)),
        Rule(selectors=("h1", "h2"), declarations=(Declaration(property="margin", value="0"),)),
    )
)

print(compile(sheet))
print(compile(sheet, {"compress": True}))
