"""
JSON serialization and deserialization workloads.
"""

import json
import random
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from ..benchmark.runner import SuiteResult
from ..benchmark.utils import format_bytes
from .base import BaseSuite


THEMES = ["light", "dark"]
LANGUAGES = ["en", "zh", "es", "fr"]
ACTIVITY_TYPES = ["login", "logout", "purchase", "view"]


class Complexity(Enum):
    """Shape of the generated payload."""
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


def _iso(moment: datetime) -> str:
    """UTC timestamp in the 2024-01-01T00:00:00.000Z form."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _simple_payload(rng: random.Random) -> Dict[str, Any]:
    return {
        "id": 1,
        "name": "Test User",
        "email": "test@example.com",
        "active": True,
    }


def _medium_payload(rng: random.Random) -> Dict[str, Any]:
    now = _iso(datetime.now(timezone.utc))
    return {
        "id": 1,
        "name": "Test User",
        "email": "test@example.com",
        "profile": {
            "age": 30,
            "city": "New York",
            "interests": ["coding", "music", "travel"],
            "settings": {
                "theme": "dark",
                "notifications": True,
                "privacy": {
                    "public": False,
                    "friends": True,
                },
            },
        },
        "orders": [
            {
                "id": i,
                "product": f"Product {i}",
                "price": rng.random() * 100,
                "date": now,
                "items": [
                    {
                        "id": j,
                        "name": f"Item {j}",
                        "quantity": rng.randint(1, 10),
                    }
                    for j in range(rng.randint(1, 5))
                ],
            }
            for i in range(100)
        ],
    }


def _complex_payload(rng: random.Random) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "metadata": {
            "version": "1.0.0",
            "generated": _iso(now),
            "schema": "user-data-v1",
        },
        "users": [
            {
                "id": i,
                "username": f"user{i}",
                "email": f"user{i}@example.com",
                "profile": {
                    "firstName": f"First{i}",
                    "lastName": f"Last{i}",
                    "bio": f"This is a bio for user {i}. " * 10,
                    "avatar": f"https://example.com/avatar/{i}.jpg",
                    "social": {
                        "twitter": f"@user{i}",
                        "github": f"user{i}",
                        "linkedin": f"user-{i}",
                    },
                },
                "preferences": {
                    "theme": THEMES[i % 2],
                    "language": LANGUAGES[i % 4],
                    "notifications": {
                        "email": i % 2 == 0,
                        "push": i % 3 == 0,
                        "sms": i % 5 == 0,
                    },
                },
                "activity": [
                    {
                        "id": j,
                        "type": ACTIVITY_TYPES[j % 4],
                        "timestamp": _iso(now - timedelta(hours=j)),
                        "metadata": {
                            "ip": f"192.168.1.{j % 255}",
                            "userAgent": f"Browser {j % 10}",
                            "sessionId": f"session-{i}-{j}",
                        },
                    }
                    for j in range(50)
                ],
            }
            for i in range(1000)
        ],
    }


def get_generator(complexity: Complexity) -> Callable[[random.Random], Dict[str, Any]]:
    """
    Return the payload generator for a complexity level.

    Raises:
        ValueError: If the complexity is not a known level
    """
    if complexity is Complexity.SIMPLE:
        return _simple_payload
    elif complexity is Complexity.MEDIUM:
        return _medium_payload
    elif complexity is Complexity.COMPLEX:
        return _complex_payload
    raise ValueError(f"Unsupported complexity: {complexity!r}")


def generate_test_data(
    complexity: Complexity = Complexity.MEDIUM,
    seed: Optional[int] = None,
) -> Dict[str, Any]:
    """Generate a payload of the given complexity."""
    return get_generator(Complexity(complexity))(random.Random(seed))


def serialize(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"))


def deserialize(text: str) -> Any:
    return json.loads(text)


def round_trip(data: Any) -> Any:
    return deserialize(serialize(data))


class JsonSuite(BaseSuite):
    """
    Serialization, deserialization and round-trip timings for each
    payload complexity.
    """

    name = "json"
    display_name = "JSON Processing"
    go_program_dir = "json"

    def _run(self, result: SuiteResult) -> None:
        iterations = self.config.iterations

        for complexity in Complexity:
            level = complexity.value
            self.reporter.print_section(f"{level.upper()} Data Structure")
            data = generate_test_data(complexity)
            json_string = serialize(data)

            self.reporter.console.print("Testing JSON serialization...")
            serialization = result.add(self.runner.measure(
                f"Serialization ({level})",
                iterations,
                lambda: serialize(data),
                describe=lambda text: f"{len(text)} characters",
            ))
            self.reporter.console.print(
                f"JSON size: {len(json_string)} characters ({format_bytes(len(json_string.encode('utf-8')))})\n"
            )

            self.reporter.console.print("Testing JSON deserialization...")
            deserialization = result.add(self.runner.measure(
                f"Deserialization ({level})",
                iterations,
                lambda: deserialize(json_string),
                describe=lambda parsed: "",
            ))

            self.reporter.console.print("Testing round-trip (serialize + deserialize)...")
            roundtrip = result.add(self.runner.measure(
                f"Round-trip ({level})",
                iterations,
                lambda: round_trip(data),
                describe=lambda parsed: "",
            ))

            self.reporter.console.print(f"\nSummary for {level} data:")
            for name, stats in (
                ("Serialization", serialization),
                ("Deserialization", deserialization),
                ("Round-trip", roundtrip),
            ):
                value = f"{stats.average:.3f}ms" if stats.has_data else "n/a"
                self.reporter.console.print(f"- {name}: {value}")
            self.reporter.console.print("---")
