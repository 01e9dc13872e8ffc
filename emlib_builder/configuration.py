# Copyright 2014-present PlatformIO <contact@platformio.org>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Compile job description for the emlib library.

A BuildConfiguration collects everything the cross-compiler needs: defines,
include directories, source files, flags and the name of the archive. It is
a mutable builder, every method returns the configuration itself so calls
can be chained the same way the profile lists are written.
"""

import hashlib
import json
from typing import Dict, List, Optional

from platformio import fs

DEBUG_PREFIX_MAP = "-fdebug-prefix-map="


def location_independent(flag: str) -> str:
    """Replace the checkout path of a debug prefix map with a placeholder."""
    if flag.startswith(DEBUG_PREFIX_MAP):
        return DEBUG_PREFIX_MAP + "<project>=."
    return flag


class BuildConfiguration:
    """Ordered description of one compile job."""

    def __init__(self, output_name: Optional[str] = None):
        self.defines: Dict[str, Optional[str]] = {}
        self.includes: List[str] = []
        self.files: List[str] = []
        self.flags: List[str] = []
        self.output_name = output_name

    def define(self, name: str, value: Optional[str] = None) -> "BuildConfiguration":
        # A name is defined once; redefining keeps the original position
        self.defines[name] = value
        return self

    def include(self, path: str) -> "BuildConfiguration":
        path = fs.to_unix_path(path)
        if path not in self.includes:
            self.includes.append(path)
        return self

    def file(self, path: str) -> "BuildConfiguration":
        # Startup code must stay in front, so never reorder on duplicates
        path = fs.to_unix_path(path)
        if path not in self.files:
            self.files.append(path)
        return self

    def flag(self, flag: str) -> "BuildConfiguration":
        self.flags.append(flag)
        return self

    def cppdefines(self) -> list:
        """Defines in the form SCons expects for CPPDEFINES."""
        return [
            name if value is None else (name, value)
            for name, value in self.defines.items()
        ]

    def to_dict(self) -> dict:
        return {
            "output_name": self.output_name,
            "defines": dict(self.defines),
            "includes": list(self.includes),
            "files": list(self.files),
            "flags": list(self.flags),
        }

    def fingerprint(self) -> str:
        """Short content digest of the configuration, same for every checkout."""
        data = self.to_dict()
        data["flags"] = [location_independent(f) for f in self.flags]
        phrase = json.dumps(data, sort_keys=True)
        return hashlib.md5(phrase.encode("utf-8")).hexdigest()[:16]

    def __repr__(self):
        return "BuildConfiguration(output_name=%r, files=%d, includes=%d, defines=%d)" % (
            self.output_name,
            len(self.files),
            len(self.includes),
            len(self.defines),
        )
