class PunctuationHandler:
    """Punctuation context checks used by sentence splitting"""

    @staticmethod
    def is_between_ascii_letters(text: str, pos: int) -> bool:
        """
        Check if the character at pos sits between two ASCII letters/digits,
        as the apostrophe in "It's" or the dot in "e.g".

        Only ASCII counts: str.isalpha() is also True for CJK characters,
        which would make Chinese punctuation look like an abbreviation.
        """
        if 0 < pos < len(text) - 1:
            left = text[pos - 1]
            right = text[pos + 1]
            return (left.isascii() and left.isalnum()) and (
                right.isascii() and right.isalnum()
            )
        return False

    @staticmethod
    def is_decimal_point(text: str, pos: int) -> bool:
        """Check if the '.' at pos is a decimal point (3.14)"""
        if text[pos] == "." and 0 < pos < len(text) - 1:
            return text[pos - 1].isdigit() and text[pos + 1].isdigit()
        return False

    @staticmethod
    def is_part_of_ellipsis(text: str, pos: int) -> bool:
        """Check if the '.' at pos belongs to a run of three or more dots"""
        if pos >= len(text) or text[pos] != ".":
            return False

        start = pos
        while start > 0 and text[start - 1] == ".":
            start -= 1
        end = pos
        while end < len(text) - 1 and text[end + 1] == ".":
            end += 1
        return end - start + 1 >= 3

    @classmethod
    def should_skip_for_splitting(cls, text: str, pos: int) -> bool:
        """Abbreviations, decimals and ellipses never end a sentence"""
        return (
            cls.is_between_ascii_letters(text, pos)
            or cls.is_decimal_point(text, pos)
            or cls.is_part_of_ellipsis(text, pos)
        )
