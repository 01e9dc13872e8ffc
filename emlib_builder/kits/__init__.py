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
Hardware kit adapters.

Exactly one kit is compiled into a build. Each kit lives in its own module
next to this one and exposes ``configure_kit(config)``, which appends the
kit's include directories and BSP sources to a BuildConfiguration.
"""

import importlib
from enum import Enum
from typing import Optional

from emlib_builder.errors import KitSelectionError


class KitVariant(Enum):
    DK3750 = "dk3750"
    STK3700 = "stk3700"

    @property
    def module_name(self) -> str:
        return "%s.%s" % (__name__, self.value)

    def load(self):
        return importlib.import_module(self.module_name)

    def contribute(self, config):
        """Let the kit add its own files and include paths to ``config``."""
        return self.load().configure_kit(config)


def select_kit(selection: Optional[str]) -> KitVariant:
    """
    Resolve the kit feature selection to a single variant.

    Args:
        selection: Kit name, or several names separated by commas or spaces

    Returns:
        KitVariant: The only selected kit

    Raises:
        KitSelectionError: If no kit, more than one kit or an unknown kit is named
    """
    names = [n for n in (selection or "").replace(",", " ").split() if n]
    supported = ", ".join(v.value for v in KitVariant)
    if not names:
        raise KitSelectionError(
            "No hardware kit selected. Set KIT to one of: %s" % supported
        )

    if len(set(names)) > 1:
        raise KitSelectionError(
            "Only one hardware kit can be selected, got: %s" % ", ".join(names)
        )

    try:
        return KitVariant(names[0])
    except ValueError:
        raise KitSelectionError(
            "Unknown hardware kit `%s`. Supported kits: %s" % (names[0], supported)
        ) from None
