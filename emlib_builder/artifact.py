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
Identity of the built emlib archive.

The build output directory embeds a content fingerprint in the name of its
parent directory, e.g. ``target/thumbv7m-none-eabi/build/emlib-<hash>/out``.
After a successful build that fingerprint is recorded as ``HASH=<hash>`` in
``.emlib_hash`` at the project root so other build steps can locate or cache
the archive.
"""

from pathlib import Path

from platformio import fs

from emlib_builder.errors import ArtifactPathError

HASH_FILE_NAME = ".emlib_hash"
HASH_RECORD_PREFIX = "HASH="


def extract_hash_token(out_dir):
    """
    Extract the fingerprint from an output directory path.

    The path must have at least three components and the next-to-last one
    must end with ``-<token>``. A path of any other shape is rejected rather
    than producing a truncated token.

    Args:
        out_dir: Output directory allocated by the build system

    Returns:
        str: The fingerprint token

    Raises:
        ArtifactPathError: If the path does not have the expected shape
    """
    path = fs.to_unix_path(str(out_dir))
    parts = path.rsplit("/", 2)
    if len(parts) < 3:
        raise ArtifactPathError(
            "Output directory `%s` has fewer than 3 path components, "
            "cannot derive the emlib hash" % out_dir
        )

    segment = parts[1]
    if "-" not in segment:
        raise ArtifactPathError(
            "Output directory segment `%s` of `%s` carries no `-<hash>` suffix"
            % (segment, out_dir)
        )

    token = segment.rsplit("-", 1)[1]
    if not token:
        raise ArtifactPathError(
            "Output directory segment `%s` of `%s` has an empty hash"
            % (segment, out_dir)
        )
    return token


def format_hash_record(token):
    return HASH_RECORD_PREFIX + token


def hash_file_path(project_dir):
    return Path(project_dir) / HASH_FILE_NAME


def record_hash(out_dir, project_dir):
    """Write ``HASH=<token>`` for ``out_dir`` to the project hash file."""
    record = format_hash_record(extract_hash_token(out_dir))
    print(record)

    target = hash_file_path(project_dir)
    with open(target, "w", encoding="utf-8") as fp:
        fp.write(record)
    return target


def read_hash_record(project_dir):
    """Return the token stored by the last successful build."""
    content = hash_file_path(project_dir).read_text(encoding="utf-8").strip()
    if not content.startswith(HASH_RECORD_PREFIX) or content == HASH_RECORD_PREFIX:
        raise ArtifactPathError(
            "Malformed emlib hash record in %s: %r"
            % (hash_file_path(project_dir), content)
        )
    return content[len(HASH_RECORD_PREFIX):]


def default_out_dir(build_root, kit, profile, config):
    """
    Output directory used when no host build system provides one.

    The fingerprint of the configuration is embedded the same way a host
    build system does it, so ``extract_hash_token`` returns it unchanged.
    """
    return fs.to_unix_path(
        str(
            Path(build_root)
            / kit.value
            / profile.value
            / ("emlib-%s" % config.fingerprint())
            / "out"
        )
    )
