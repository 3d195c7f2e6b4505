"""Cache converted text to disk: JSON round-trip."""

from spanmark import convert
from spanmark.serialization import from_json, to_json

styled = convert("<b>Cached</b> styled text", None, lambda tag, current: {"tag": tag})

json_str = to_json(styled)
restored = from_json(json_str)

print("Original == restored:", styled == restored)
print("JSON length:", len(json_str), "chars")
