# Configuration: colors, code length, duplicates allowed, etc.
DEFAULT_RULES = {
    "name": "classic",  # Identifier for this ruleset
    "code_length": 4,  # Number of pegs in the code
    "num_colors": 6,  # Available colors (see color set below)
    "allow_duplicates": True,  # Can the code contain repeated colors?
    "max_attempts": 12,  # Number of guesses per game
    "feedback": {
        "black_pegs": True,  # Exact: correct color + position
        "white_pegs": True,  # Color only: correct color, wrong position
    },
    "colors": [
        "r",
        "g",
        "b",
        "y",
        "m",
        "o",
    ],  # Color order defines the lexicographic order of codes
    "display": {
        "emoji_map": {  # For CLI rendering
            "r": "🔴",
            "g": "🟢",
            "b": "🔵",
            "y": "🟡",
            "m": "🟣",
            "o": "🟠",
            "BK": "⚫",
            "W": "⚪",
        }
    },
}
