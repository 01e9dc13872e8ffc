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
SCons side of the emlib build.

These helpers take a fully assembled BuildConfiguration and turn it into
SCons construction variables and build nodes. Compilation itself is done by
SCons with the ARM cross toolchain; any compiler or archiver error stops
the build.
"""

import os
from pathlib import Path

from platformio import fs
from platformio.proc import exec_command, where_is_program

DEFAULT_TOOLCHAIN_PREFIX = "arm-none-eabi"


def configure_toolchain(env, prefix=DEFAULT_TOOLCHAIN_PREFIX):
    env.Replace(
        AR="%s-ar" % prefix,
        AS="%s-as" % prefix,
        CC="%s-gcc" % prefix,
        RANLIB="%s-ranlib" % prefix,
        ARFLAGS=["rc"],
    )
    return env


def check_toolchain(prefix=DEFAULT_TOOLCHAIN_PREFIX):
    """
    Print where the cross compiler comes from.

    Returns:
        str: First line of ``<prefix>-gcc --version`` or None if the
        compiler is not on PATH
    """
    print("The ARM embedded toolchain must be available in the PATH")
    # where_is_program hands back the bare name when nothing is found
    compiler = where_is_program("%s-gcc" % prefix)
    if not os.path.isfile(compiler):
        print("Warning! %s-gcc was not found in PATH" % prefix)
        return None

    result = exec_command([compiler, "--version"])
    if result["returncode"] != 0:
        print("Warning! Could not query %s version" % compiler)
        return None

    lines = result["out"].strip().splitlines()
    version = lines[0] if lines else ""
    print("Toolchain: %s" % version)
    return version


def apply_configuration(env, config):
    env.Append(
        CPPDEFINES=config.cppdefines(),
        CPPPATH=list(config.includes),
        CCFLAGS=list(config.flags),
        # The startup file is preprocessed assembly and needs the CPU flags too
        ASPPFLAGS=list(config.flags),
    )
    return env


def object_path(out_dir, source):
    return fs.to_unix_path(str(Path(out_dir) / "obj" / (source + ".o")))


def source_path(project_dir, source):
    if project_dir is None:
        return source
    return fs.to_unix_path(str(Path(project_dir) / source))


def build_library(env, config, out_dir, project_dir=None):
    """
    Declare the objects and the static archive for ``config``.

    Args:
        env: SCons environment with the toolchain already configured
        config: Assembled BuildConfiguration
        out_dir: Directory that receives objects and the archive
        project_dir: Directory the configuration paths are relative to,
            defaults to the directory of the calling SConscript

    Returns:
        list: SCons nodes of the archive
    """
    apply_configuration(env, config)

    objects = []
    for source in config.files:
        objects.append(
            env.StaticObject(
                target=object_path(out_dir, source),
                source=source_path(project_dir, source),
            )
        )

    return env.StaticLibrary(
        target=fs.to_unix_path(str(Path(out_dir) / config.output_name)),
        source=objects,
    )
