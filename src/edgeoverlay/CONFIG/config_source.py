# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Configuration source resolving named values from defaults, .env files,
the process environment and explicit overrides.
"""
import logging
import os
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values

from ..exceptions import MissingConfigurationError
from ..UTILS.string_interpolation import EnvironmentInterpolator

logger = logging.getLogger(__name__)

class ConfigSource:
    """
    Read-only view over merged configuration values.
    Values are merged once at construction and never change afterwards.
    """
    def __init__(self,
                 defaults: Optional[Mapping[str, str]] = None,
                 env_files: Optional[List[str]] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 overrides: Optional[Mapping[str, str]] = None,
                 base_dir: str = "."):
        """
        Initializes the configuration source.

        :param defaults: Lowest-precedence values.
        :param env_files: Paths to .env files; later files override earlier ones.
        :param environ: Process environment to layer on top; defaults to os.environ.
        :param overrides: Highest-precedence values, e.g. from the command line.
        :param base_dir: The base directory for resolving relative .env paths.
        """
        self.base_dir = base_dir
        merged: Dict[str, str] = dict(defaults or {})

        for env_file in env_files or []:
            file_path = os.path.join(self.base_dir, env_file)
            if not os.path.exists(file_path):
                logger.debug("Skipping missing env file %s", file_path)
                continue
            file_env = dotenv_values(file_path, interpolate=False)
            merged.update({k: v for k, v in file_env.items() if v is not None})

        merged.update(os.environ if environ is None else environ)
        merged.update(overrides or {})
        self._values = merged

    def get_value(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Returns the interpolated value for a key, or the default when unset.
        """
        raw = self._values.get(key)
        if raw is None:
            return default
        return EnvironmentInterpolator.interpolate(raw, self._values, strict=False)

    def get_required(self, key: str) -> str:
        """
        Returns the value for a key that must be present.

        :raises MissingConfigurationError: If the key is unset.
        """
        value = self.get_value(key)
        if value is None:
            raise MissingConfigurationError(key)
        return value
