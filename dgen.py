'''
.------..------..------..------.
|d.--. ||g.--. ||e.--. ||n.--. |
| :/\: || :/\: || (\/) || :(): |
| (__) || :\/: || :\/: || ()() |
| '--'d|| '--'g|| '--'e|| '--'n|
`------'`------'`------'`------'
'''

import csv
import io
import numpy as np
from faker import Faker
from seqy import generate, Enumerable
from typing import Any, Dict, List, Optional


class Generator:
    """turns a schema into one record per call."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)

    def _fake_value(self, provider: str, kwargs: Optional[Dict] = None) -> Any:
        try:
            method = getattr(self._fake, provider)
        except AttributeError:
            raise ValueError(f"faker has no provider '{provider}'")
        return method(**(kwargs or {}))

    def create(self, schema: Any) -> Any:
        # dicts become records, field by field
        if isinstance(schema, dict):
            if "_qen_provider" in schema:
                return self._special(schema)
            return {key: self.create(value) for key, value in schema.items()}

        # ('pyint', {'min_value': 1}) -> faker call with kwargs
        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._fake_value(schema[0], schema[1])

        # 'word' -> faker call; unknown strings are literals
        if isinstance(schema, str):
            return self._fake_value(schema) if hasattr(self._fake, schema) else schema

        return schema

    def _special(self, config: Dict) -> Any:
        provider = config["_qen_provider"]
        if provider == "choice":
            # numpy scalars back to plain python values
            picked = self._rng.choice(config["from"])
            return picked.item() if hasattr(picked, 'item') else picked
        if provider == "literal":
            return config["value"]
        raise ValueError(f"unknown _qen_provider: '{provider}'")


def from_schema(schema: Any, seed: Optional[int] = None) -> Enumerable:
    """an infinite, lazy sequence of records matching schema. bound it with .take(n)."""
    generator = Generator(seed)
    return generate(lambda: generator.create(schema))


def to_csv_text(records: List[Dict[str, Any]]) -> str:
    """render flat records as csv text, header first"""
    if not records:
        return ""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(records[0].keys()), lineterminator="\n")
    writer.writeheader()
    writer.writerows(records)
    return buffer.getvalue()
