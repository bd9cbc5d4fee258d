#!/usr/bin/env python3
"""
Configuration system for the sandbox console
Supports YAML files, CLI overrides, and programmatic access
"""

import yaml
import argparse
import logging
import re
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple
from dataclasses import dataclass, field


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
	"""A config section as a mapping; a null section counts as empty"""
	section = data[name]
	if section is None:
		return {}
	if not isinstance(section, dict):
		raise TypeError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
	return section


@dataclass
class InterpreterConfig:
	"""Interpreter settings"""
	default_locale: str = "en_US"
	deny_list: List[str] = field(default_factory=lambda: ["mobileAlert"])
	strings_file: Optional[str] = None  # None = packaged strings.yaml

	def to_dict(self) -> Dict[str, Any]:
		return {
			'default_locale': self.default_locale,
			'deny_list': list(self.deny_list),
			'strings_file': self.strings_file
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'InterpreterConfig':
		deny_list = data.get('deny_list')
		if deny_list is None:
			deny_list = ['mobileAlert']
		return cls(
			default_locale=data.get('default_locale', 'en_US'),
			deny_list=list(deny_list),
			strings_file=data.get('strings_file')
		)


@dataclass
class ConsoleConfig:
	"""Console loop and logging level settings"""
	prompt: str = "$ "
	chain_delimiter: str = ";"
	verbose: bool = False
	quiet: bool = False

	def to_dict(self) -> Dict[str, Any]:
		return {
			'prompt': self.prompt,
			'chain_delimiter': self.chain_delimiter,
			'verbose': self.verbose,
			'quiet': self.quiet
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'ConsoleConfig':
		return cls(
			prompt=data.get('prompt', '$ '),
			chain_delimiter=data.get('chain_delimiter', ';'),
			verbose=data.get('verbose', False),
			quiet=data.get('quiet', False)
		)


@dataclass
class SandboxConfig:
	"""Complete sandbox console configuration"""
	interpreter: InterpreterConfig = field(default_factory=InterpreterConfig)
	console: ConsoleConfig = field(default_factory=ConsoleConfig)

	# Metadata
	config_version: str = "1.0"

	def to_dict(self) -> Dict[str, Any]:
		"""Convert to dictionary for YAML serialization"""
		return {
			'config_version': self.config_version,
			'interpreter': self.interpreter.to_dict(),
			'console': self.console.to_dict(),
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'SandboxConfig':
		"""Create from dictionary (YAML loading)"""
		config = cls()
		if 'config_version' in data:
			config.config_version = str(data['config_version'])
		if 'interpreter' in data:
			config.interpreter = InterpreterConfig.from_dict(_section(data, 'interpreter'))
		if 'console' in data:
			config.console = ConsoleConfig.from_dict(_section(data, 'console'))
		return config


class ConfigurationManager:
	"""
	Manages configuration loading, merging, validation and saving
	"""

	def __init__(self):
		self.config = None
		self.config_file_path = None

		self.logger = logging.getLogger(__name__)

		# Standard config file locations (in order of preference)
		self.config_search_paths = [
			Path.cwd() / "sandbox_commands.yaml",
			Path.cwd() / "config" / "sandbox_commands.yaml",
			Path.home() / ".config" / "sandbox_commands" / "config.yaml",
		]

	def load_config(self, config_file: Optional[str] = None) -> SandboxConfig:
		"""
		Load configuration from file with fallback chain

		Args:
			config_file: Specific config file path, or None for auto-discovery

		Returns:
			Loaded configuration object (defaults if nothing usable was found)
		"""
		self.config = SandboxConfig()
		if config_file:
			config_path = Path(config_file)
			if config_path.exists():
				self.config = self._load_yaml_file(config_path)
				self.config_file_path = config_path
				self.logger.info(f"Loaded config from: {config_path}")
			else:
				self.logger.warning(f"Config file not found: {config_path}")
				self.logger.info("Using default configuration")
		else:
			for path in self.config_search_paths:
				if path.exists():
					self.config = self._load_yaml_file(path)
					self.config_file_path = path
					self.logger.info(f"Auto-discovered config: {path}")
					break
			else:
				self.logger.info("No config file found, using defaults")

		return self.config

	def _load_yaml_file(self, file_path: Path) -> SandboxConfig:
		try:
			with open(file_path, 'r', encoding='utf-8') as f:
				yaml_data = yaml.safe_load(f) or {}
			if not isinstance(yaml_data, dict):
				self.logger.error(f"Config file {file_path} is not a mapping, using defaults")
				return SandboxConfig()
			return SandboxConfig.from_dict(yaml_data)
		except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
			self.logger.error(f"Error loading config file {file_path}: {e}")
			return SandboxConfig()

	def merge_cli_args(self, args: argparse.Namespace) -> SandboxConfig:
		"""
		Merge CLI arguments into configuration (CLI takes precedence)
		"""
		if self.config is None:
			self.config = SandboxConfig()

		if getattr(args, 'locale', None):
			self.config.interpreter.default_locale = args.locale
		if getattr(args, 'strings', None):
			self.config.interpreter.strings_file = args.strings
		if getattr(args, 'verbose', False):
			self.config.console.verbose = True
		if getattr(args, 'quiet', False):
			self.config.console.quiet = True

		return self.config

	def validate_config(self) -> Tuple[bool, List[str]]:
		"""
		Check the loaded configuration

		Returns:
			(is_valid, list of error messages)
		"""
		errors = []
		config = self.config or SandboxConfig()

		locale = config.interpreter.default_locale
		if not isinstance(locale, str) or not re.match(r'^\w+$', locale):
			errors.append(f"Invalid default locale: {locale!r}")

		deny_list = config.interpreter.deny_list
		if not isinstance(deny_list, list) or not all(isinstance(name, str) for name in deny_list):
			errors.append("Deny list must be a list of command names")

		delimiter = config.console.chain_delimiter
		if not isinstance(delimiter, str) or len(delimiter) != 1:
			errors.append(f"Chain delimiter must be a single character, got {delimiter!r}")

		if config.console.verbose and config.console.quiet:
			errors.append("Console cannot be both verbose and quiet")

		return len(errors) == 0, errors

	def save_config(self, file_path: Optional[str] = None) -> bool:
		"""
		Save current configuration to YAML file

		Returns:
			True if saved successfully
		"""
		if file_path:
			target_path = Path(file_path)
		elif self.config_file_path:
			target_path = self.config_file_path
		else:
			target_path = Path("sandbox_commands.yaml")

		config = self.config or SandboxConfig()
		try:
			target_path.parent.mkdir(parents=True, exist_ok=True)
			with open(target_path, 'w', encoding='utf-8') as f:
				f.write("# Sandbox console configuration\n")
				f.write(f"# Version: {config.config_version}\n\n")
				yaml.dump(config.to_dict(), f,
						  default_flow_style=False,
						  sort_keys=False,
						  allow_unicode=True,
						  indent=2)
			self.logger.info(f"Configuration saved to: {target_path}")
			return True
		except OSError as e:
			self.logger.error(f"Error saving config to {target_path}: {e}")
			return False


def create_argument_parser() -> argparse.ArgumentParser:
	"""Argument parser for the sandbox console"""
	parser = argparse.ArgumentParser(
		description='Sandbox command console',
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  %(prog)s                                 # Default settings
  %(prog)s --locale de_DE                  # Start in German
  %(prog)s -c my_config.yaml               # Use specific config file
  %(prog)s --save-config sandbox.yaml      # Write current settings and exit

Config file search order:
  - sandbox_commands.yaml (current directory)
  - config/sandbox_commands.yaml
  - ~/.config/sandbox_commands/config.yaml
		"""
	)

	config_group = parser.add_argument_group('Configuration')
	config_group.add_argument(
		'-c', '--config',
		type=str,
		help='Configuration file path (YAML format)'
	)
	config_group.add_argument(
		'--save-config',
		type=str,
		metavar='FILE',
		help='Save current configuration to file and exit'
	)

	interp_group = parser.add_argument_group('Interpreter')
	interp_group.add_argument(
		'--locale',
		type=str,
		help='Default locale (e.g. en_US, de_DE)'
	)
	interp_group.add_argument(
		'--strings',
		type=str,
		metavar='FILE',
		help='YAML string table to use instead of the packaged one'
	)

	console_group = parser.add_argument_group('Console')
	console_group.add_argument(
		'-v', '--verbose',
		action='store_true',
		help='Debug logging'
	)
	console_group.add_argument(
		'-q', '--quiet',
		action='store_true',
		help='Only warnings and errors'
	)

	return parser


def setup_logging(config: SandboxConfig) -> None:
	"""Configure console logging from the loaded settings"""
	if config.console.verbose:
		logging.basicConfig(level=logging.DEBUG, format='%(name)s: %(message)s')
	elif config.console.quiet:
		logging.basicConfig(level=logging.WARNING, format='%(message)s')
	else:
		logging.basicConfig(level=logging.INFO, format='%(message)s')
