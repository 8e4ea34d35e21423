"""Translator that leaves the translation field empty."""


class NoneTranslator:
    """Always-available translator returning an empty string.

    Registered last so translation can be switched off explicitly.
    """

    @property
    def id(self) -> str:
        return "none"

    @property
    def name(self) -> str:
        return "None"

    def is_available(self) -> bool:
        return True

    def translate(self, text: str) -> str:
        return ""
