"""Canned text messages offered when reaching out."""

_TEMPLATES = (
    "Hey {name}! I was just thinking about you. How have you been?",
    "Hi {name}, it's been a while. Want to catch up this week?",
    "{name}! Saw something today that reminded me of you. How's everything going?",
    "Hi {name}, hope you're doing well. Let me know when you're free for a quick call.",
)


def message_templates(name: str | None) -> list[str]:
    """Return the templates addressed to name (first name is enough)."""
    name = (name or "").strip() or "there"
    return [t.format(name=name) for t in _TEMPLATES]
