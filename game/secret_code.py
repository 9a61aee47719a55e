import random
from .ruleset import DEFAULT_RULES


class Code:
    """
        Represents an immutable Mastermind code (a secret or a guess).
    Attributes:
        sequence (tuple[str, ...]): The sequence of colors representing the code.
        rules (dict): The ruleset for validation.
        is_valid (bool): Whether the code is valid according to the rules."""

    __slots__ = ("_sequence", "_rules", "_is_valid")

    def __init__(self, sequence=None, rules=None):
        """
        Initialize a Code instance.

        Args:
            sequence (str, list, tuple or None): The color symbols of the
            code. Strings may contain spaces and any letter case.
            rules (dict or None): Reference to the ruleset (defines length,
            colors, duplicates, etc.).
        """

        self._rules = rules or DEFAULT_RULES
        if isinstance(sequence, str):
            self._sequence = tuple(c.lower() for c in sequence.replace(" ", ""))
        elif sequence is None:
            self._sequence = ()
        else:
            self._sequence = tuple(str(c).lower() for c in sequence)

        self._is_valid = False
        if self._sequence:
            self._is_valid = self.validate(strict=False)

    @classmethod
    def random(cls, rng: random.Random | None = None, rules=None) -> "Code":
        """
        Draw a code uniformly at random, independently per position.

        Args:
            rng (random.Random or None): Source of randomness. A fresh,
            unseeded generator is used when omitted.
            rules (dict or None): The ruleset to draw colors from.

        Returns:
            Code: The generated code.
        """

        rules = rules or DEFAULT_RULES
        rng = rng or random.Random()
        colors = rules["colors"]
        length = rules["code_length"]

        # Generate the code depending on whether duplicates are allowed.
        if rules.get("allow_duplicates", True):
            sequence = [rng.choice(colors) for _ in range(length)]
        else:
            sequence = rng.sample(colors, k=length)

        code = cls(sequence, rules=rules)
        # Validate the generated code
        code.validate(strict=True)
        return code

    @property
    def sequence(self) -> tuple[str, ...]:
        return self._sequence

    @property
    def rules(self) -> dict:
        return self._rules

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    def validate(self, strict: bool = True) -> bool:
        """
        Validate the code (length, colors, duplicates).

        Args:
            strict (bool): If True, raise ValueError with an explanatory
            message when validation fails. If False, return False on failure.

        Returns:
            bool: True if the code sequence is valid; False if invalid and
            strict is False.
        """

        def fail(msg: str) -> bool:
            if strict:
                raise ValueError(msg)
            return False

        # Validates, if code sequence length is as declared in the rules,
        if len(self._sequence) != self.rules["code_length"]:
            return fail(
                f"Code length must be {self.rules['code_length']}, "
                f"but got {len(self._sequence)}."
            )

        # Validates if code sequence has no duplicates, when its not allowed.
        if not self.rules.get("allow_duplicates", True) and len(
            set(self._sequence)
        ) != len(self._sequence):
            return fail("Duplicates are not allowed in this ruleset.")

        # Validates if code sequence only contains colors as in the rules.
        for color in self._sequence:
            if color not in self.rules["colors"]:
                allowed = ", ".join(self.rules["colors"])
                return fail(f"Invalid color '{color}'. Allowed: {allowed}.")

        return True

    def as_string(self) -> str:
        """
        Return a string representation of the code (e.g. 'rgby').
        Returns:
            str: The code as a string.
        """
        return "".join(self._sequence) if self._sequence else "EMPTY"

    def __iter__(self):
        return iter(self._sequence)

    def __len__(self):
        return len(self._sequence)

    def __getitem__(self, i):
        return self._sequence[i]

    def __hash__(self):
        return hash(self._sequence)

    def __eq__(self, other):
        """
        Check equality between this Code and another object.

        Args:
            other (Code, list or tuple): The object to compare against.

        Returns:
            bool: True if the sequences are equal, False otherwise.
        """

        if isinstance(other, Code):
            return self._sequence == other._sequence
        if isinstance(other, (list, tuple)):
            return list(self._sequence) == list(other)
        return NotImplemented

    def __repr__(self):
        return f"Code('{self.as_string()}')"

    def __str__(self):
        return self.as_string()
