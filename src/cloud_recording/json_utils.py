"""Text-level helpers for salvaging file lists from loosely formatted payloads."""

from __future__ import annotations


def extract_json_array(text: str) -> str | None:
	"""Find the first balanced JSON array in text.

	Scans from the first '[' and tracks nesting depth. Brackets inside string
	literals (including after escaped quotes) do not count. The candidate is
	not validated as JSON; callers still need to parse it.

	Returns:
		The substring from the first '[' through its matching ']', or None when
		there is no '[' or the array never closes.
	"""
	start = text.find("[")
	if start == -1:
		return None
	depth = 0
	in_string = False
	escape = False
	for i in range(start, len(text)):
		ch = text[i]
		if in_string:
			if escape:
				escape = False
			elif ch == "\\":
				escape = True
			elif ch == '"':
				in_string = False
			continue
		if ch == '"':
			in_string = True
		elif ch == "[":
			depth += 1
		elif ch == "]":
			depth -= 1
			if depth == 0:
				return text[start:i + 1]
	return None


def looks_like_false_literal(text: str) -> bool:
	"""Return True if text reads as a (possibly corrupted) ``false`` literal.

	Only letters are kept, lower-cased; digits and punctuation are noise, so
	"f4lse" and "False" both qualify. Besides an exact "false", a four-letter
	sequence starting with "f" and ending with "lse" is accepted. Nothing
	broader is.
	"""
	letters = "".join(ch.lower() for ch in text if ch.isalpha())
	if letters == "false":
		return True
	return len(letters) == 4 and letters.startswith("f") and letters.endswith("lse")
