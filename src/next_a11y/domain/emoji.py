"""Emoji detection and the static emoji name table."""

import re

EMOJI_NAMES: dict[str, str] = {
    # Smileys & people
    "\U0001F600": "grinning face",
    "\U0001F601": "beaming face with smiling eyes",
    "\U0001F602": "face with tears of joy",
    "\U0001F603": "grinning face with big eyes",
    "\U0001F604": "grinning face with smiling eyes",
    "\U0001F605": "grinning face with sweat",
    "\U0001F606": "grinning squinting face",
    "\U0001F609": "winking face",
    "\U0001F60A": "smiling face with smiling eyes",
    "\U0001F60D": "smiling face with heart-eyes",
    "\U0001F60E": "smiling face with sunglasses",
    "\U0001F60F": "smirking face",
    "\U0001F612": "unamused face",
    "\U0001F614": "pensive face",
    "\U0001F618": "face blowing a kiss",
    "\U0001F621": "pouting face",
    "\U0001F622": "crying face",
    "\U0001F62D": "loudly crying face",
    "\U0001F62E": "face with open mouth",
    "\U0001F631": "face screaming in fear",
    "\U0001F633": "flushed face",
    "\U0001F634": "sleeping face",
    "\U0001F637": "face with medical mask",
    "\U0001F914": "thinking face",
    "\U0001F923": "rolling on the floor laughing",
    "\U0001F929": "star-struck",
    "\U0001F970": "smiling face with hearts",
    "\U0001F973": "partying face",
    # Hands & gestures
    "\U0001F44D": "thumbs up",
    "\U0001F44E": "thumbs down",
    "\U0001F44F": "clapping hands",
    "\U0001F44B": "waving hand",
    "\U0001F4AA": "flexed biceps",
    "\U0001F64F": "folded hands",
    "✌\uFE0F": "victory hand",
    "\U0001F91D": "handshake",
    "\U0001F44C": "OK hand",
    "✍\uFE0F": "writing hand",
    # Hearts
    "❤\uFE0F": "red heart",
    "\U0001F494": "broken heart",
    "\U0001F495": "two hearts",
    "\U0001F496": "sparkling heart",
    "\U0001F499": "blue heart",
    "\U0001F49A": "green heart",
    "\U0001F49B": "yellow heart",
    "\U0001F49C": "purple heart",
    "\U0001F5A4": "black heart",
    "\U0001F90D": "white heart",
    "\U0001F9E1": "orange heart",
    # Nature & animals
    "\U0001F525": "fire",
    "⭐": "star",
    "\U0001F31F": "glowing star",
    "☀\uFE0F": "sun",
    "\U0001F308": "rainbow",
    "⚡": "high voltage",
    "\U0001F4A7": "droplet",
    "❄\uFE0F": "snowflake",
    "\U0001F33A": "hibiscus",
    "\U0001F339": "rose",
    "\U0001F335": "cactus",
    "\U0001F343": "leaf fluttering in wind",
    "\U0001F436": "dog face",
    "\U0001F431": "cat face",
    "\U0001F98B": "butterfly",
    # Objects & symbols
    "\U0001F680": "rocket",
    "✅": "check mark",
    "❌": "cross mark",
    "⚠\uFE0F": "warning",
    "\U0001F6A8": "police car light",
    "\U0001F4A1": "light bulb",
    "\U0001F389": "party popper",
    "\U0001F381": "wrapped gift",
    "\U0001F3AF": "bullseye",
    "\U0001F3C6": "trophy",
    "\U0001F4E2": "loudspeaker",
    "\U0001F514": "bell",
    "\U0001F4CC": "pushpin",
    "\U0001F4DD": "memo",
    "\U0001F4DA": "books",
    "\U0001F4BB": "laptop",
    "\U0001F4F1": "mobile phone",
    "\U0001F510": "locked with key",
    "\U0001F512": "locked",
    "\U0001F513": "unlocked",
    "\U0001F504": "counterclockwise arrows",
    "\U0001F4B0": "money bag",
    "\U0001F3E0": "house",
    "\U0001F4E7": "e-mail",
    # Food & drink
    "☕": "hot beverage",
    "\U0001F355": "pizza",
    "\U0001F382": "birthday cake",
    "\U0001F37A": "beer mug",
    "\U0001F377": "wine glass",
    # Miscellaneous
    "✨": "sparkles",
    "\U0001F4AF": "hundred points",
    "\U0001F4A5": "collision",
    "\U0001F4AB": "dizzy",
    "\U0001F440": "eyes",
    "\U0001F4AC": "speech balloon",
    "⏰": "alarm clock",
    "\U0001F30D": "globe showing Europe-Africa",
    "\U0001F30E": "globe showing Americas",
    "\U0001F30F": "globe showing Asia-Australia",
}

# Characters rendered as emoji by default.
_PRESENTATION = (
    "\U0001F300-\U0001F5FF"
    "\U0001F600-\U0001F64F"
    "\U0001F680-\U0001F6FF"
    "\U0001F7E0-\U0001F7EB"
    "\U0001F90C-\U0001F9FF"
    "\U0001FA70-\U0001FAFF"
    "⌚⌛⏩-⏬⏰⏳◽◾"
    "☔☕♈-♓♿⚓⚡⚪⚫⚽⚾"
    "⛄⛅⛎⛔⛪⛲⛳⛵⛺⛽"
    "✅✊✋✨❌❎❓-❕❗➕-➗"
    "➰➿⬛⬜⭐⭕"
)
# Characters that need U+FE0F to render as emoji.
_TEXT_DEFAULT = (
    "©®‼⁉™ℹ↔-↙↩↪"
    "⌨⏏⏭-⏯⏱⏲⏸-⏺Ⓜ▪▫▶◀◻◼"
    "☀-☄☎☑☘☝☠☢☣☦☪☮☯"
    "☸-☺♀♂♟♠♣♥♦♨♻♾"
    "⚒⚔-⚗⚙⚛⚜⚠⚧⚰⚱⛈⛏⛑⛓"
    "⛩⛰⛱⛴⛷-⛹✂✈✉✌✍✏✒✔"
    "✖✝✡✳✴❄❇❣❤➡⤴⤵⬅-⬇"
    "〰〽㊗㊙"
)
_SINGLE = (
    f"(?:[{_PRESENTATION}]\uFE0F?[\U0001F3FB-\U0001F3FF]?"
    f"|[{_TEXT_DEFAULT}]\uFE0F"
    "|[\U0001F1E6-\U0001F1FF]{2})"
)
EMOJI_PATTERN = re.compile(f"{_SINGLE}(?:\u200D{_SINGLE})*")


class EmojiNames:
    @staticmethod
    def name(emoji: str) -> str:
        """Human-readable name, 'emoji' when unknown."""
        return EMOJI_NAMES.get(emoji, "emoji")
