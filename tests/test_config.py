import os
import pytest
from sortable_link.config.sortablelink import SortableLinkConfig, env_overrides, resolve_formatting_function


def test_defaults():
    config = SortableLinkConfig()
    assert config.uri_relation_column_separator == '.'
    assert config.asc_suffix == '-asc' and config.desc_suffix == '-desc'
    assert config.enable_icons is True and config.clickable_icon is False
    assert config.columns == ()


def test_from_mapping_ignores_unknown_keys():
    config = SortableLinkConfig.from_mapping({'anchor_class': 'x', 'columns': [{'class': 'c', 'rows': ['a']}], 'bogus': 1})
    assert config.anchor_class == 'x'
    assert config.columns == ({'class': 'c', 'rows': ['a']},)


def test_from_app_config_reads_prefixed_keys():
    config = SortableLinkConfig.from_app_config({'SORTABLELINK_ICON_TEXT_SEPARATOR': ' ', 'DEBUG': True})
    assert config.icon_text_separator == ' '
    assert config.sortable_icon == 'fa fa-sort'


def test_env_overrides_coerces_values():
    overrides = env_overrides({
        'SORTABLELINK_ENABLE_ICONS': 'off',
        'SORTABLELINK_CLICKABLE_ICON': 'Yes',
        'SORTABLELINK_COLUMNS': '[{"class": "fa fa-user", "rows": ["name"]}]',
        'SORTABLELINK_ANCHOR_CLASS': '',
        'SORTABLELINK_ICON_TEXT_SEPARATOR': '',
        'UNRELATED': 'x',
    })
    assert overrides == {
        'SORTABLELINK_ENABLE_ICONS': False,
        'SORTABLELINK_CLICKABLE_ICON': True,
        'SORTABLELINK_COLUMNS': ({'class': 'fa fa-user', 'rows': ['name']},),
        'SORTABLELINK_ANCHOR_CLASS': None,
        'SORTABLELINK_ICON_TEXT_SEPARATOR': '',
    }


def test_env_overrides_rejects_bad_values():
    with pytest.raises(ValueError):
        env_overrides({'SORTABLELINK_ENABLE_ICONS': 'maybe'})
    with pytest.raises(ValueError):
        env_overrides({'SORTABLELINK_COLUMNS': '{not json'})


def test_init_app_reads_environment(monkeypatch, make_app):
    monkeypatch.setenv('SORTABLELINK_SORTABLE_ICON', 'bi bi-arrow-down-up')
    app = make_app(SORTABLELINK_ANCHOR_CLASS='link')
    assert app.config['SORTABLELINK_SORTABLE_ICON'] == 'bi bi-arrow-down-up'
    assert app.config['SORTABLELINK_ANCHOR_CLASS'] == 'link'


def test_resolve_formatting_function():
    assert resolve_formatting_function(None) is None
    assert resolve_formatting_function(str.upper) is str.upper
    assert resolve_formatting_function('string.capwords')('a b') == 'A B'
    assert resolve_formatting_function('string:capwords')('a b') == 'A B'
    assert resolve_formatting_function('missing_module.fn') is None
    assert resolve_formatting_function('string.not_there') is None
    assert resolve_formatting_function(42) is None


def test_init_app_layers_config_env_file_and_defaults(monkeypatch, tmp_path, make_app):
    env_file = tmp_path / '.env'
    env_file.write_text('SORTABLELINK_ANCHOR_CLASS=from-file\nSORTABLELINK_CLICKABLE_ICON=true\nSORTABLELINK_ASC_SUFFIX=-file\n')
    monkeypatch.setenv('SORTABLELINK_ASC_SUFFIX', '-env')
    monkeypatch.delenv('SORTABLELINK_ANCHOR_CLASS', raising=False)
    app = make_app(env_file=str(env_file), SORTABLELINK_CLICKABLE_ICON=False)
    assert app.config['SORTABLELINK_ANCHOR_CLASS'] == 'from-file'
    # explicit app.config beats the environment, the process environment beats the file
    assert app.config['SORTABLELINK_CLICKABLE_ICON'] is False
    assert app.config['SORTABLELINK_ASC_SUFFIX'] == '-env'
    assert app.config['SORTABLELINK_DESC_SUFFIX'] == '-desc'
    assert 'SORTABLELINK_ANCHOR_CLASS' not in os.environ
