"""
Parser module for scene descriptions.

Handles parsing of input text into walls and start/goal points.

Format, one statement per line::

    # comment
    wall 100 100 50 50
    start 0 0
    goal 200 200
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from .models import Obstacle, Point


class ParseError(Exception):
    """Raised when input parsing fails."""

    pass


@dataclass
class SceneDefinition:
    """Result of parsing a scene description."""

    walls: List[Obstacle] = field(default_factory=list)
    start: Optional[Point] = None
    goal: Optional[Point] = None


class Parser:
    """Parses scene text into walls and start/goal points."""

    ARITY = {"wall": 4, "start": 2, "goal": 2}

    def parse(self, input_text: str) -> SceneDefinition:
        """
        Parse input text and return a SceneDefinition.

        Args:
            input_text: Multi-line string of wall/start/goal statements

        Returns:
            SceneDefinition with walls in input order

        Raises:
            ParseError: If input format is invalid
        """
        result = SceneDefinition()

        for line_num, line in enumerate(input_text.strip().split("\n"), 1):
            stripped = line.split("#", 1)[0].strip()

            # Skip empty lines and comments
            if not stripped:
                continue

            parts = stripped.split()
            keyword = parts[0].lower()

            if keyword not in self.ARITY:
                raise ParseError(f"Line {line_num}: Unknown statement: {stripped}")

            expected = self.ARITY[keyword]
            if len(parts) - 1 != expected:
                raise ParseError(
                    f"Line {line_num}: '{keyword}' expects {expected} numbers, "
                    f"got {len(parts) - 1}"
                )

            values = [self._parse_number(part, line_num) for part in parts[1:]]

            if keyword == "wall":
                try:
                    result.walls.append(Obstacle(*values))
                except ValueError as e:
                    raise ParseError(f"Line {line_num}: {e}") from e
            elif keyword == "start":
                if result.start is not None:
                    raise ParseError(f"Line {line_num}: Start defined twice")
                result.start = Point(*values)
            else:
                if result.goal is not None:
                    raise ParseError(f"Line {line_num}: Goal defined twice")
                result.goal = Point(*values)

        return result

    def _parse_number(self, text: str, line_num: int) -> float:
        try:
            value = float(text)
        except ValueError:
            raise ParseError(f"Line {line_num}: Not a number: {text}") from None
        if not math.isfinite(value):
            raise ParseError(f"Line {line_num}: Not a finite number: {text}")
        # Keep integers as ints so they print the way they were written
        return int(value) if value.is_integer() and "." not in text else value


def parse_scene(input_text: str) -> SceneDefinition:
    """
    Convenience function to parse a scene description.

    Args:
        input_text: Multi-line scene text

    Returns:
        SceneDefinition
    """
    parser = Parser()
    return parser.parse(input_text)
