# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of Codealong, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
import json

# Python field name -> GitHub REST API key
_jsonKeys = {
    "id": "id",
    "login": "login",
    "fullName": "full_name",
    "htmlUrl": "html_url",
    "gitUrl": "git_url",
    "fork": "fork",
}


@dataclasses.dataclass
class Repo:
    """ Repository on GitHub, as returned by the REST API. """

    id: int
    login: str
    fullName: str
    htmlUrl: str
    gitUrl: str
    fork: bool

    @classmethod
    def fromJson(cls, data: dict) -> Repo:
        # Unknown keys are ignored; the API returns many more than we need.
        kwargs = {field: data[key] for field, key in _jsonKeys.items()}

        for field in dataclasses.fields(cls):
            value = kwargs[field.name]
            expectedType = {"int": int, "str": str, "bool": bool}[field.type]
            # bool is a subclass of int, don't let it pass for an id
            if not isinstance(value, expectedType) or (expectedType is int and isinstance(value, bool)):
                raise TypeError(f"'{_jsonKeys[field.name]}' should be {field.type}, got {type(value).__name__}")

        return cls(**kwargs)

    def toJson(self) -> dict:
        return {key: getattr(self, field) for field, key in _jsonKeys.items()}

    @classmethod
    def loads(cls, text: str) -> Repo:
        return cls.fromJson(json.loads(text))

    def dumps(self) -> str:
        return json.dumps(self.toJson())
