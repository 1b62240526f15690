"""Regular expressions shared by the dialect detector, parser and serializer."""

import re

from ..models.enums import KEY_TO_TASKS_EMOJI

ISO_MATCH = r"\d{4}-\d{2}-\d{2}(?:T\d{2}:\d{2})?"
REMINDER_DATE = r"\d{4}-\d{2}-\d{2}(?: \d{2}:\d{2})?"

# Some editors append a variation selector to emoji
_VS = "\ufe0f?"
_EMOJI_CLASS = "".join(KEY_TO_TASKS_EMOJI.values())

# Any emoji marker, with the date (and reminder clock time) attached to it
TASKS_EMOJI_SEARCH = re.compile(
    rf"[{_EMOJI_CLASS}]{_VS} ?(?:{ISO_MATCH}(?: \d{{2}}:\d{{2}})?)?"
)
TASKS_REPEAT_SEARCH = re.compile(
    rf"{KEY_TO_TASKS_EMOJI['repeat']}{_VS} ?([a-zA-Z0-9 ]+)", re.IGNORECASE
)
TASKS_DATE_SEARCH: dict[str, re.Pattern[str]] = {
    key: re.compile(rf"{KEY_TO_TASKS_EMOJI[key]}{_VS} ?({ISO_MATCH})")
    for key in ("scheduled", "due", "start", "created", "completion")
}

# Reminder syntaxes, tried in this order
TASKS_REMINDER = re.compile(rf" ?{KEY_TO_TASKS_EMOJI['reminder']}{_VS} ?({ISO_MATCH}(?: \d{{2}}:\d{{2}})?)")
NATIVE_REMINDER = re.compile(rf" ?\(@({REMINDER_DATE})\)")
KANBAN_REMINDER = re.compile(rf" ?@\{{({REMINDER_DATE})\}}")
REMINDER_SEARCH: tuple[re.Pattern[str], ...] = (TASKS_REMINDER, NATIVE_REMINDER, KANBAN_REMINDER)

# [key:: value] or (key:: value)
INLINE_FIELD_SEARCH = re.compile(r"[\[(][^\])]+:: [^\])]+[\])] *")
INLINE_FIELD_CAPTURE = re.compile(r"[\[(]([^\[\]()]+?):: ([^\])]+)[\])]")

TAG_SEARCH = re.compile(r"#[\w\-/]+ *")
WIKI_LINK_SEARCH = re.compile(r"\[\[([^\]|]*)(?:\|([^\]]*))?\]\]")
LINK_SEARCH = re.compile(r"\[(.*?)\]\(.*?\)")
BLOCK_REFERENCE = re.compile(r" *(\^[A-Za-z0-9-]+)\s*$")

# - [ ] , * [x] , 1. [ ]
CHECKBOX_PREFIX = re.compile(r"^\s*(?:[-*+]|\d+[.)]) \[(.)\] ?")

# Simple dialect
SIMPLE_TIME = r"(?:\d{1,2}:\d{1,2}|\d{1,2}(?= ?-))(?: ?- ?\d{1,2}(?::\d{1,2})?)?"
SIMPLE_SCHEDULED_DATE = re.compile(r"^(\d{4}-\d{2}-\d{2}) ")
SIMPLE_SCHEDULED_TIME = re.compile(rf"^({SIMPLE_TIME})(?=\s|$)")
SIMPLE_TRAILING_SCHEDULE = re.compile(
    rf"(?<!>) (\d{{4}}-\d{{2}}-\d{{2}})(?: ({SIMPLE_TIME}))?"
    r"(?=(?: ?> ?\d{4}-\d{2}-\d{2})?(?: (?:\?|!{1,3}))?\s*$)"
)
SIMPLE_TIME_SEPARATOR = re.compile(r" ?- ?")
SIMPLE_PRIORITY = re.compile(r" (\?|!{1,3})$")
SIMPLE_DUE = re.compile(r" ?> ?(\d{4}-\d{2}-\d{2})")

CALENDAR_KEYS = re.compile(r"\[allDay:: |\[date:: |\[startTime:: |\[endTime:: ")
BRACKET_KEYS = re.compile(r"\[scheduled:: |\[due:: ")
