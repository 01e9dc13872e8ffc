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

"""Errors that abort the emlib build."""


class EmlibBuildError(RuntimeError):
    """Base class for fatal build configuration errors."""


class KitSelectionError(EmlibBuildError):
    """Zero, several or unknown hardware kits were selected."""


class ArtifactPathError(EmlibBuildError):
    """The output directory or hash record does not have the expected shape."""
