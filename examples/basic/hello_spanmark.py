"""Markup to styled text in a few lines, zero config, zero deps."""

from spanmark import convert

STYLES = {"b": {"weight": "bold"}, "i": {"slant": "italic"}}

styled = convert(
    "<b>Hello</b> world, how are <i>you</i> today!",
    {"font": "Helvetica"},
    lambda tag, current: STYLES.get(tag),
)

for text, attributes in styled.runs():
    print(repr(text), attributes)
