import pytest

from layercfg.errors import (
    ConfigError,
    ConfigFileAlreadyExistsError,
    ConfigFileNotFoundError,
    ConfigMarshalError,
    ConfigParseError,
    RemoteConfigError,
    UnsupportedConfigError,
    UnsupportedRemoteProviderError,
)


def test_marshal_error_message_and_cause():
    cause = ValueError("boom")
    err = ConfigMarshalError(cause)
    assert str(err) == "While marshaling config: boom"
    assert err.cause is cause


def test_parse_error_keeps_cause():
    cause = ValueError("bad token")
    err = ConfigParseError(cause)
    assert err.cause is cause
    assert "bad token" in str(err)


def test_unsupported_config_quotes_type():
    err = UnsupportedConfigError("xml")
    assert str(err) == 'Unsupported Config Type "xml"'
    assert err.config_type == "xml"


def test_unsupported_remote_provider_message():
    err = UnsupportedRemoteProviderError("zookeeper")
    assert str(err) == 'Unsupported Remote Provider Type "zookeeper"'


def test_remote_config_error_message():
    assert str(RemoteConfigError("No Remote Providers")) == (
        "Remote Configurations Error: No Remote Providers"
    )


def test_not_found_formats_location_list():
    err = ConfigFileNotFoundError("config", ["/etc/app", "/home/app"])
    assert str(err) == 'Config File "config" Not Found in "[/etc/app /home/app]"'
    assert err.locations == "[/etc/app /home/app]"


def test_not_found_accepts_preformatted_locations():
    err = ConfigFileNotFoundError("config", "[here]")
    assert err.locations == "[here]"


def test_not_found_is_file_not_found():
    err = ConfigFileNotFoundError("config", [])
    assert isinstance(err, FileNotFoundError)
    assert str(err) == 'Config File "config" Not Found in "[]"'
    assert err.locations == "[]"


def test_already_exists_message_and_hierarchy():
    err = ConfigFileAlreadyExistsError("/tmp/config.yaml")
    assert str(err) == 'Config File "/tmp/config.yaml" Already Exists'
    with pytest.raises(FileExistsError) as info:
        raise err
    assert info.value is err


@pytest.mark.parametrize(
    "err",
    [
        ConfigMarshalError("x"),
        ConfigParseError("x"),
        UnsupportedConfigError("x"),
        UnsupportedRemoteProviderError("x"),
        RemoteConfigError("x"),
        ConfigFileNotFoundError("x", []),
        ConfigFileAlreadyExistsError("x"),
    ],
)
def test_all_errors_share_base(err):
    with pytest.raises(ConfigError) as info:
        raise err
    assert info.value is err
    assert "x" in str(info.value)