"""YAML loading and saving of conversion options and class maps.

Options file structure (every key optional, camelCase names accepted):
    output_target: html
    css_framework: tailwind
    content_handling: hybrid
    custom_class_map:
      core/paragraph:
        block: prose
    ssr: true
    ssr_options:
      level: maximum
      fold_budget: 3
      flags:
        minify_output: false
    streaming:
      chunk_size: 50
      max_buffered_chunks: 4

Class map file structure (one framework):
    core/paragraph:
      block: ""
      align:
        center: text-center
"""

import os
from typing import Any, Dict

import yaml

from src.css_frameworks.resolver import validate_class_map
from src.models.errors import ConfigError, FilesystemError, InvalidOptionsError

from .options import ConversionOptions

# Options holding callables cannot come from a file
CODE_ONLY_FIELDS = {
    'block_transformers', 'blockTransformers',
    'pre_process', 'post_process', 'preProcessHTML', 'postProcessHTML',
}


class OptionsLoader:
    """Loads conversion options and framework class maps from YAML files."""

    @classmethod
    def load(cls, config_path: str) -> ConversionOptions:
        """Load conversion options from a YAML file.

        Args:
            config_path: Path to the YAML options file

        Returns:
            ConversionOptions built from the file

        Raises:
            FilesystemError: If the file cannot be read
            ConfigError: If the file is not a YAML mapping or sets
                code-only options
            InvalidOptionsError: If an option value is invalid
        """
        config_dict = cls._read_yaml(config_path)
        return cls._parse_config(config_dict)

    @classmethod
    def load_class_map(cls, path: str) -> Dict[str, Any]:
        """Load a framework class map from a YAML file.

        Raises:
            FilesystemError: If the file cannot be read
            ConfigError: If the map does not have the class map shape
        """
        class_map = cls._read_yaml(path)
        try:
            validate_class_map(class_map, option=os.path.basename(path))
        except InvalidOptionsError as e:
            raise ConfigError(e.original_message, e.option)
        return class_map

    @classmethod
    def save(cls, config_path: str, options: ConversionOptions) -> None:
        """Save the serializable part of the options to a YAML file.

        Handlers and hooks are not written.

        Raises:
            FilesystemError: If the file cannot be written
        """
        yaml_str = yaml.safe_dump(
            options.to_dict(),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(config_dir, 'create_directory', str(e))

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(config_path, 'write', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'write', str(e))

    @classmethod
    def _read_yaml(cls, path: str) -> Dict[str, Any]:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(path, 'read', 'File not found')
        except PermissionError:
            raise FilesystemError(path, 'read', 'Permission denied')
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(path, 'read', str(e))

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        if data is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(data, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(data).__name__}"
            )
        return data

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> ConversionOptions:
        code_only = CODE_ONLY_FIELDS & set(config_dict)
        ssr_options = config_dict.get('ssr_options', config_dict.get('ssrOptions'))
        if isinstance(ssr_options, dict):
            code_only |= {f"ssr_options.{key}" for key in CODE_ONLY_FIELDS & set(ssr_options)}
        if code_only:
            raise ConfigError(
                f"Options can only be set from code: {', '.join(sorted(code_only))}"
            )
        return ConversionOptions.from_dict(config_dict)
