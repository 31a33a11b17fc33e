import pytest

from reevit.core.environment import (
    API_BASE_URL_PRODUCTION,
    API_BASE_URL_SANDBOX,
    build_environment,
    default_base_url,
    detect_environment,
    load_env_file,
)


@pytest.mark.parametrize(
    "credential, key_type, expected",
    [
        ("sk_test_abc", "secret", "sandbox"),
        ("sk_sandbox_abc", "secret", "sandbox"),
        ("sk_live_abc", "secret", "production"),
        ("pk_test_abc", "publishable", "sandbox"),
        ("pk_sandbox_abc", "publishable", "sandbox"),
        ("pk_live_abc", "publishable", "production"),
        ("pk_test_abc", "secret", "production"),
        ("sk_test_abc", "publishable", "production"),
        ("", "secret", "production"),
    ],
)
def test_detect_environment(credential, key_type, expected):
    assert detect_environment(credential, key_type) == expected


def test_default_base_url_follows_environment():
    assert default_base_url("sk_test_abc", "secret") == API_BASE_URL_SANDBOX
    assert default_base_url("sk_live_abc", "secret") == API_BASE_URL_PRODUCTION


def test_unknown_key_type_is_rejected():
    with pytest.raises(ValueError):
        detect_environment("sk_test_abc", "restricted")


def test_load_env_file_keeps_existing_values(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\nREEVIT_API_KEY=sk_test_file\nREEVIT_ORG_ID='org_file'\nnot-a-pair\n",
        encoding="utf-8",
    )
    environ = {"REEVIT_API_KEY": "sk_test_env"}

    merged = load_env_file(str(env_file), environ=environ)

    assert merged["REEVIT_API_KEY"] == "sk_test_env"
    assert merged["REEVIT_ORG_ID"] == "org_file"
    assert environ["REEVIT_ORG_ID"] == "org_file"


def test_build_environment_precedence(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("A=file\nB=file\nC=file\n", encoding="utf-8")

    environment = build_environment(
        env_file=str(env_file),
        base={"A": "base", "B": "base"},
        overrides={"A": "override"},
    )

    assert environment.get("A") == "override"
    assert environment.get("B") == "base"
    assert environment.get("C") == "file"
    assert environment.get("D", "missing") == "missing"


def test_build_environment_missing_file_is_ignored(tmp_path):
    environment = build_environment(env_file=str(tmp_path / "absent"), base={})
    assert dict(environment.variables) == {}
