"""Choose between the REST and Lutim reply formats for an upload."""

LUTIM_FORMAT_FIELD = "format"
LUTIM_LIFETIME_FIELD = "delete-day"


def wants_lutim_reply(format_value: str | None, delete_day: str | None) -> bool:
    """Return True when an upload should get the Lutim JSON envelope.

    Lutim clients either ask for ``format=json`` explicitly or send a
    ``delete-day`` lifetime, which plain REST uploads never do.
    """
    return format_value == "json" or bool(delete_day)
