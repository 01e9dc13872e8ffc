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


"""EFM32GG DK3750 development kit."""

BSP_DIR = "efm32-common/kits/common/bsp"

INCLUDES = (
    "efm32-common/kits/EFM32GG_DK3750/config",
)

FILES = (
    BSP_DIR + "/bsp_dk_3201.c",
    BSP_DIR + "/bsp_dk_leds.c",
    BSP_DIR + "/bsp_trace.c",
)


def configure_kit(config):
    for path in INCLUDES:
        config.include(path)
    for path in FILES:
        config.file(path)
    return config
