import pytest

from zenodo_publish import ConfigError, ConfigService


class TestConfigService():

    def test_reads_yaml_file(self, config_file):
        config = ConfigService(config_file)
        assert config.get_app_value('zenodo_token_sandbox') == 'sandbox-token'
        assert config.get_app_value('zenodo_token_production') == 'production-token'

    def test_environment_wins_over_file(self, config_file, monkeypatch):
        monkeypatch.setenv('ZENODO_TOKEN_SANDBOX', ' from-env ')
        config = ConfigService(config_file)
        assert config.get_app_value('zenodo_token_sandbox') == 'from-env'

    def test_config_file_from_environment(self, config_file, monkeypatch):
        monkeypatch.setenv('ZENODO_CONFIG', config_file)
        assert ConfigService().get_app_value('zenodo_token_production') == 'production-token'

    def test_missing_key_gives_default(self):
        config = ConfigService()
        assert config.get_app_value('zenodo_token_sandbox') == ''
        assert config.get_app_value('zenodo_timeout', '30') == '30'

    def test_non_string_values(self, tmp_path):
        path = tmp_path / 'zenodo.yml'
        path.write_text('zenodo_timeout: 12\n')
        assert ConfigService(str(path)).get_app_value('zenodo_timeout') == '12'

    def test_unreadable_file(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigService(str(tmp_path / 'missing.yml'))

    @pytest.mark.parametrize('content', ['key: [unclosed', '- a\n- b\n'])
    def test_invalid_file(self, tmp_path, content):
        path = tmp_path / 'zenodo.yml'
        path.write_text(content)
        with pytest.raises(ConfigError):
            ConfigService(str(path))

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'zenodo.yml'
        path.write_text('')
        assert ConfigService(str(path)).get_app_value('zenodo_token_sandbox') == ''
