# This file is part of the TileProxy project.
# Copyright (C) 2026 TileProxy contributors
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
Loading of YAML configuration files.
"""
import yaml

# libyaml based loader if PyYAML was built with it
_SafeLoader = getattr(yaml, 'CSafeLoader', yaml.SafeLoader)


class YAMLError(Exception):
    pass


def load_yaml(doc):
    """
    Parse `doc` (string or file object) into a configuration dictionary.

    Only plain YAML types are supported (no Python object tags). An
    empty document results in an empty dictionary.
    """
    try:
        data = yaml.load(doc, Loader=_SafeLoader)
    except yaml.YAMLError as ex:
        raise YAMLError(str(ex)) from ex

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise YAMLError('configuration is not a YAML dictionary but %s' % type(data).__name__)
    return data


def load_yaml_file(filename):
    with open(filename, 'rb') as f:
        return load_yaml(f)
