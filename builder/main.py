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
emlib library build.

Resolves the build profile and hardware kit, compiles the emlib library
with the ARM cross toolchain and records the archive hash in .emlib_hash.

Usage:
    scons KIT=stk3700
    BUILD_ENV=test scons KIT=dk3750
    scons KIT=stk3700 configinfo
"""

import json
import os
import sys

from SCons.Script import (
    ARGUMENTS,
    COMMAND_LINE_TARGETS,
    AlwaysBuild,
    Default,
    DefaultEnvironment,
)

from emlib_builder.artifact import default_out_dir, record_hash
from emlib_builder.errors import EmlibBuildError
from emlib_builder.kits import select_kit
from emlib_builder.profiles import assemble, base_config, resolve_profile
from emlib_builder.toolchain import (
    DEFAULT_TOOLCHAIN_PREFIX,
    build_library,
    check_toolchain,
    configure_toolchain,
)

env = DefaultEnvironment()
PROJECT_DIR = env.Dir("#").abspath

# Inputs are read once here and passed on explicitly
profile_signal = ARGUMENTS.get("BUILD_ENV", os.environ.get("BUILD_ENV"))
kit_selection = ARGUMENTS.get("KIT", os.environ.get("EMLIB_KIT"))
toolchain_prefix = ARGUMENTS.get("TOOLCHAIN_PREFIX", DEFAULT_TOOLCHAIN_PREFIX)
build_root = ARGUMENTS.get("BUILD_DIR", os.path.join(PROJECT_DIR, ".emlib_build"))

try:
    kit = select_kit(kit_selection)
except EmlibBuildError as e:
    sys.stderr.write("Error: %s\n" % e)
    env.Exit(1)

profile = resolve_profile(profile_signal)
config = assemble(profile, base_config(PROJECT_DIR), kit)
out_dir = os.environ.get("OUT_DIR") or default_out_dir(build_root, kit, profile, config)

print("emlib: profile=%s kit=%s" % (profile.value, kit.value))
print("emlib: output directory %s" % out_dir)


def create_silent_action(action_func):
    """Create a silent SCons action that suppresses output"""
    silent_action = env.Action(action_func)
    silent_action.strfunction = lambda target, source, env: ""
    return silent_action


def write_emlib_hash(target, source, env):
    # Errors propagate so SCons fails the build instead of leaving a stale hash
    record_hash(out_dir, PROJECT_DIR)


def print_configuration(target, source, env):
    print(json.dumps(
        dict(
            profile=profile.value,
            kit=kit.value,
            out_dir=out_dir,
            fingerprint=config.fingerprint(),
            **config.to_dict()
        ),
        indent=2,
    ))


#
# Target: Show the resolved configuration without compiling
#

AlwaysBuild(env.Alias("configinfo", [], create_silent_action(print_configuration)))

#
# Target: Build the emlib archive and record its hash
#

if "configinfo" not in COMMAND_LINE_TARGETS:
    check_toolchain(toolchain_prefix)

configure_toolchain(env, toolchain_prefix)
env.PrependENVPath("PATH", os.environ.get("PATH", ""))

target_lib = build_library(env, config, out_dir, PROJECT_DIR)

# Runs after every successful build, also when the archive is up to date
target_hash = env.Alias("emlib", target_lib, create_silent_action(write_emlib_hash))
AlwaysBuild(target_hash)

Default(target_hash)
