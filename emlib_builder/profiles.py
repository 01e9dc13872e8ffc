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
Build profiles for the emlib library.

The production and test configurations share only the base configuration
and the kit contribution. Their source lists are enumerated separately so
that test doubles never end up in a production archive.
"""

from enum import Enum
from typing import Optional

from platformio import fs

from emlib_builder.configuration import DEBUG_PREFIX_MAP, BuildConfiguration

DEVICE = "EFM32GG990F1024"
OUTPUT_NAME = "libcompiler-rt.a"

EMLIB_SRC = "efm32-common/emlib/src"
DEVICE_DIR = "efm32-common/Device/EFM32GG"
KIT_DRIVERS_DIR = "efm32-common/kits/common/drivers"

STARTUP_FILES = (
    DEVICE_DIR + "/Source/GCC/startup_efm32gg.S",
    DEVICE_DIR + "/Source/system_efm32gg.c",
)

# Application sources compiled by both profiles
SHARED_APP_FILES = (
    "src/chip/chip.c",
    "src/cmsis/cmsis.c",
    "src/gpio/gpio.c",
    "src/irq/irq.c",
    "src/usart/usart.c",
)

SHARED_ACCESSOR_FILES = (
    "src/adc/get_adc.c",
    "src/timer/get_timer.c",
)


class Profile(Enum):
    PRODUCTION = "prod"
    TEST = "test"


def resolve_profile(signal: Optional[str]) -> Profile:
    """
    Map the BUILD_ENV signal to a profile.

    Only the exact tokens "prod" and "test" are recognized. Anything else,
    including a missing value, selects the production profile.
    """
    if signal == Profile.TEST.value:
        return Profile.TEST
    return Profile.PRODUCTION


def base_config(project_dir: str) -> BuildConfiguration:
    config = BuildConfiguration(OUTPUT_NAME)
    config.define(DEVICE)

    for path in (
        "efm32-common/CMSIS/Include",
        DEVICE_DIR + "/Include",
        "efm32-common/kits/common/bsp",
        "efm32-common/emlib/inc",
    ):
        config.include(path)

    for path in STARTUP_FILES:
        config.file(path)

    for module in ("cmu", "gpio", "usart", "emu", "ebi", "int"):
        config.file("%s/em_%s.c" % (EMLIB_SRC, module))

    for flag in ("-g", "-Wall", "-mthumb", "-mcpu=cortex-m3"):
        config.flag(flag)

    # Keep object files independent of the checkout location
    config.flag("%s%s=." % (DEBUG_PREFIX_MAP, fs.to_unix_path(str(project_dir))))
    return config


def production_config(config: BuildConfiguration) -> BuildConfiguration:
    (
        config
        .include("efm32-common/kits/common/bsp")
        .include("src/timer")
        .include("src/adc")
        .include("src/leuart")
        .include("src/lesense")
    )

    for module in (
        "acmp", "adc", "dma", "i2c", "leuart",
        "lesense", "prs", "rtc", "system", "timer",
    ):
        config.file("%s/em_%s.c" % (EMLIB_SRC, module))

    config.file("src/adc/adc.c")
    for path in SHARED_APP_FILES:
        config.file(path)

    (
        config
        .file("src/ebi/ebi.c")
        .file("src/emu/emu.c")
        .file("src/dma/dma.c")
        .file("src/i2c/i2c.c")
        .file("src/leuart/leuart.c")
        .file("src/lesense/lesense.c")
        .file("src/rtc/rtc.c")
        .file("src/timer/timer.c")
    )

    config.file("src/acmp/get_acmp.c")
    for path in SHARED_ACCESSOR_FILES:
        config.file(path)
    config.file("src/leuart/get_leuart.c")

    return (
        config
        .include(KIT_DRIVERS_DIR)
        .file(KIT_DRIVERS_DIR + "/nandflash.c")
        .file(KIT_DRIVERS_DIR + "/dmactrl.c")
        .file(KIT_DRIVERS_DIR + "/retargetio.c")
    )


def testing_config(config: BuildConfiguration) -> BuildConfiguration:
    # Unity prints through the UART; CMock needs NULL on bare metal
    config.define("UNITY_OUTPUT_CHAR", "print_char")
    config.define("NULL", "0")

    (
        config
        .include("test/lib/Unity/src")
        .include("test/lib/cmock/src")
        .include("src/timer")
        .include("src/adc")
    )

    for path in SHARED_APP_FILES + SHARED_ACCESSOR_FILES:
        config.file(path)

    (
        config
        .file("test/lib/Unity/src/unity.c")
        .file("test/lib/cmock/src/cmock.c")
        .file("test/util/usart_print.c")
    )

    (
        config
        .include("test/mocks")
        .file("test/mocks/Mockem_adc.c")
        .file("test/mocks/Mockem_timer.c")
        .file("test/mocks/Mockadc.c")
        .file("test/mocks/Mocktimer.c")
    )

    return (
        config
        .file("test/tests/adc.c")
        .file("test/tests/timer.c")
    )


PROFILE_BUILDERS = {
    Profile.PRODUCTION: production_config,
    Profile.TEST: testing_config,
}


def assemble(profile: Profile, base: BuildConfiguration, kit) -> BuildConfiguration:
    """
    Layer the kit and the profile on top of the base configuration.

    ``base`` is extended in place and returned. ``kit`` is anything with a
    ``contribute(config)`` method, normally a KitVariant.
    """
    return PROFILE_BUILDERS[profile](kit.contribute(base))
