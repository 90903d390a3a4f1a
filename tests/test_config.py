"""
Tests for the configuration management system.

Tests configuration loading, validation, environment variable overrides,
and the global configuration helpers.
"""

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import yaml

from number_scrambler.utils.config import (
    DEFAULT_CONFIG,
    ConfigContext,
    ConfigurationError,
    ConfigurationFactory,
    ConfigurationManager,
    ConfigValidator,
    EnvironmentVariableResolver,
    get_config,
    init_config,
    set_config,
)


def _clean_environ():
    return {k: v for k, v in os.environ.items() if not k.startswith("NLS_")}


class TestConfigValidator(unittest.TestCase):
    """Test configuration validation utilities."""

    def test_validate_positive_int(self):
        self.assertEqual(ConfigValidator.validate_positive_int(5, "test"), 5)

        for bad in [0, -1, 2.5, "3", True]:
            with self.subTest(value=bad):
                with self.assertRaises(ConfigurationError):
                    ConfigValidator.validate_positive_int(bad, "test")

    def test_validate_non_negative_int(self):
        self.assertEqual(ConfigValidator.validate_non_negative_int(0, "test"), 0)
        self.assertEqual(ConfigValidator.validate_non_negative_int(10000, "test"), 10000)

        with self.assertRaises(ConfigurationError):
            ConfigValidator.validate_non_negative_int(-1, "test")

    def test_validate_string_choice(self):
        choices = ["fisher_yates", "draw_and_remove"]
        self.assertEqual(ConfigValidator.validate_string_choice("fisher_yates", choices, "test"), "fisher_yates")

        with self.assertRaises(ConfigurationError):
            ConfigValidator.validate_string_choice("bogosort", choices, "test")


class TestEnvironmentVariableResolver(unittest.TestCase):
    """Test environment variable resolution."""

    @patch.dict(os.environ, {'TEST_VAR': 'test_value'})
    def test_resolve_simple_variable(self):
        self.assertEqual(EnvironmentVariableResolver.resolve_string("${TEST_VAR}"), "test_value")

    def test_resolve_with_default(self):
        result = EnvironmentVariableResolver.resolve_string("${NONEXISTENT_NLS_VAR:INFO}")
        self.assertEqual(result, "INFO")

    def test_resolve_missing_variable(self):
        with self.assertRaises(ConfigurationError):
            EnvironmentVariableResolver.resolve_string("${NONEXISTENT_NLS_VAR}")

    @patch.dict(os.environ, {'TEST_VAR': 'test_value'})
    def test_resolve_nested_structure(self):
        data = {"a": "${TEST_VAR}", "b": {"list": ["${TEST_VAR}", 3]}}

        self.assertEqual(EnvironmentVariableResolver.resolve_value(data),
                         {"a": "test_value", "b": {"list": ["test_value", 3]}})


class TestConfigurationManager(unittest.TestCase):
    """Test the main configuration manager."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.env_patch = patch.dict(os.environ, _clean_environ(), clear=True)
        self.env_patch.start()

    def tearDown(self):
        self.env_patch.stop()
        import shutil
        shutil.rmtree(self.temp_dir)

    def _write_config(self, data) -> Path:
        path = Path(self.temp_dir) / "config.yaml"
        with open(path, 'w') as f:
            yaml.safe_dump(data, f)
        return path

    def test_defaults_without_file(self):
        manager = ConfigurationManager()

        self.assertEqual(manager.get('generation.size'), 10000)
        self.assertEqual(manager.get('generation.algorithm'), 'fisher_yates')
        self.assertEqual(manager.get('display.per_row'), 10)
        self.assertEqual(manager.get('display.width'), 5)
        self.assertEqual(manager.get('logging.level'), 'WARNING')

    def test_file_overrides_defaults(self):
        path = self._write_config({"generation": {"size": 500}})
        manager = ConfigurationManager(config_file=path)

        self.assertEqual(manager.get('generation.size'), 500)
        # Untouched keys keep their defaults
        self.assertEqual(manager.get('generation.algorithm'), 'fisher_yates')

    def test_missing_file_falls_back_to_defaults(self):
        manager = ConfigurationManager(config_file=Path(self.temp_dir) / "absent.yaml")
        self.assertEqual(manager.get('generation.size'), 10000)

    def test_invalid_file_value_rejected(self):
        path = self._write_config({"generation": {"size": -5}})

        with self.assertRaises(ConfigurationError):
            ConfigurationManager(config_file=path)

    def test_invalid_algorithm_rejected(self):
        path = self._write_config({"generation": {"algorithm": "bogosort"}})

        with self.assertRaises(ConfigurationError):
            ConfigurationManager(config_file=path)

    def test_malformed_yaml(self):
        path = Path(self.temp_dir) / "config.yaml"
        path.write_text("generation: [unclosed\n")

        with self.assertRaises(ConfigurationError):
            ConfigurationManager(config_file=path)

    def test_non_mapping_yaml(self):
        path = Path(self.temp_dir) / "config.yaml"
        path.write_text("- just\n- a list\n")

        with self.assertRaises(ConfigurationError):
            ConfigurationManager(config_file=path)

    def test_env_overrides(self):
        with patch.dict(os.environ, {'NLS_GENERATION__SIZE': '250',
                                     'NLS_DISPLAY__PER_ROW': '8'}):
            manager = ConfigurationManager()

        self.assertEqual(manager.get('generation.size'), 250)
        self.assertEqual(manager.get('display.per_row'), 8)

    def test_env_overrides_take_precedence_over_file(self):
        path = self._write_config({"generation": {"size": 500}})

        with patch.dict(os.environ, {'NLS_GENERATION__SIZE': '42'}):
            manager = ConfigurationManager(config_file=path)

        self.assertEqual(manager.get('generation.size'), 42)

    def test_env_interpolation_in_file(self):
        path = self._write_config({"logging": {"level": "${NLS_TEST_LEVEL:ERROR}"}})
        manager = ConfigurationManager(config_file=path)

        self.assertEqual(manager.get('logging.level'), 'ERROR')

    def test_env_value_conversion(self):
        manager = ConfigurationManager()

        self.assertTrue(manager._convert_env_value('true'))
        self.assertFalse(manager._convert_env_value('off'))
        self.assertEqual(manager._convert_env_value('1'), 1)
        self.assertEqual(manager._convert_env_value('42'), 42)
        self.assertEqual(manager._convert_env_value('3.5'), 3.5)
        self.assertEqual(manager._convert_env_value('[1, 2]'), [1, 2])
        self.assertEqual(manager._convert_env_value('fisher_yates'), 'fisher_yates')
        self.assertIsNone(manager._convert_env_value(''))

    def test_get_required_and_default(self):
        manager = ConfigurationManager()

        self.assertEqual(manager.get('nonexistent.path', 'default'), 'default')
        with self.assertRaises(ConfigurationError):
            manager.get('nonexistent.path', required=True)

    def test_set_validates(self):
        manager = ConfigurationManager()

        manager.set('generation.size', 7)
        self.assertEqual(manager.get('generation.size'), 7)

        with self.assertRaises(ConfigurationError):
            manager.set('generation.size', -7)

        manager.set('generation.size', -7, validate=False)
        self.assertEqual(manager.get('generation.size'), -7)

    def test_has_and_get_section(self):
        manager = ConfigurationManager()

        self.assertTrue(manager.has('display.width'))
        self.assertFalse(manager.has('display.colour'))
        self.assertEqual(manager.get_section('display'), {'per_row': 10, 'width': 5})

    def test_to_dict_is_a_copy(self):
        manager = ConfigurationManager()
        data = manager.to_dict()
        data['generation']['size'] = 1

        self.assertEqual(manager.get('generation.size'), 10000)
        self.assertEqual(DEFAULT_CONFIG['generation']['size'], 10000)

    def test_save_and_reload(self):
        manager = ConfigurationManager()
        manager.set('generation.size', 321)
        path = Path(self.temp_dir) / "saved.yaml"
        manager.save_to_file(path)

        reloaded = ConfigurationManager(config_file=path)
        self.assertEqual(reloaded.get('generation.size'), 321)

    def test_get_env_info(self):
        with patch.dict(os.environ, {'NLS_GENERATION__SIZE': '5'}):
            info = ConfigurationManager().get_env_info()

        self.assertEqual(info['prefix'], 'NLS')
        self.assertEqual(info['overrides'], {'generation.size': '5'})
        self.assertEqual(info['total_overrides'], 1)


class TestGlobalConfig(unittest.TestCase):
    """Test global configuration helpers."""

    def tearDown(self):
        set_config(None)

    def test_create_testing_merges_dict(self):
        config = ConfigurationFactory.create_testing({"generation": {"size": 3}})

        self.assertEqual(config.get('generation.size'), 3)
        self.assertEqual(config.get('display.width'), 5)
        self.assertFalse(config.strict_validation)

    def test_init_and_get_config(self):
        config = init_config(environment="testing")
        self.assertIs(get_config(), config)

    def test_init_unknown_environment(self):
        with self.assertRaises(ConfigurationError):
            init_config(environment="staging")

    def test_config_context_restores(self):
        set_config(ConfigurationFactory.create_testing())

        with ConfigContext(**{'generation.size': 12, 'display.colour': 'red'}) as config:
            self.assertEqual(config.get('generation.size'), 12)
            self.assertEqual(config.get('display.colour'), 'red')

        self.assertEqual(get_config().get('generation.size'), 10000)
        self.assertIsNone(get_config().get('display.colour'))


if __name__ == '__main__':
    unittest.main()
