"""Write straight into a custom sink: ANSI-colored terminal output."""

from spanmark import convert

CODES = {"bold": "1", "italic": "3", "underline": "4"}


class AnsiSink:
    """Collects text and ranges, renders them with ANSI escape codes."""

    def __init__(self) -> None:
        self.text = ""
        self.styles: list[set[str]] = []

    def append(self, text: str) -> None:
        self.text += text
        self.styles.extend(set() for _ in text)

    def apply_attributes(self, start, length, attributes) -> None:
        for index in range(start, start + length):
            self.styles[index] |= {key for key, on in attributes.items() if on}

    def __len__(self) -> int:
        return len(self.text)

    def render(self) -> str:
        out = []
        for char, keys in zip(self.text, self.styles):
            codes = ";".join(CODES[key] for key in sorted(keys) if key in CODES)
            out.append(f"\x1b[{codes}m{char}\x1b[0m" if codes else char)
        return "".join(out)


def resolve(tag, current):
    return {"b": {"bold": True}, "i": {"italic": True}, "u": {"underline": True}}.get(tag)


markup = "<b>Bold <i>and italic</i></b> and <u>underlined</u>"
sink = convert(markup, None, resolve, sink=AnsiSink())
print(sink.render())
