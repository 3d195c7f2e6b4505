"""Thread safe: convert 1000 strings in parallel with one shared Formatter."""

from concurrent.futures import ThreadPoolExecutor

from spanmark import Formatter

fmt = Formatter(lambda tag, current: {"bold": True} if tag == "b" else None)
markups = [f"<b>Item {i}</b>: detail for item {i}" for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(fmt, markups))

print(f"Converted {len(results)} strings in parallel")
print("First:", results[0].text, results[0].ranges)
