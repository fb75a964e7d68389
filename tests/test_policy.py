import importlib

import shamir_consensus.policy as policy_module


def test_defaults(monkeypatch):
    for name in ("SHAMIR_WORKERS", "SHAMIR_TIMEOUT", "SHAMIR_LOG_LEVEL", "SHAMIR_PROGRESS"):
        monkeypatch.delenv(name, raising=False)
    policy = policy_module.load_policy()
    assert policy == policy_module.ReconstructionPolicy()
    assert policy.workers == 1
    assert policy.timeout == 0.0
    assert policy.log_level == "WARNING"
    assert policy.progress is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SHAMIR_WORKERS", "4")
    monkeypatch.setenv("SHAMIR_TIMEOUT", "2.5")
    monkeypatch.setenv("SHAMIR_LOG_LEVEL", "debug")
    monkeypatch.setenv("SHAMIR_PROGRESS", "off")
    policy = policy_module.load_policy()
    assert (policy.workers, policy.timeout, policy.log_level, policy.progress) == (4, 2.5, "DEBUG", False)


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("SHAMIR_WORKERS", "many")
    monkeypatch.setenv("SHAMIR_TIMEOUT", "-3")
    monkeypatch.setenv("SHAMIR_LOG_LEVEL", "LOUD")
    monkeypatch.setenv("SHAMIR_PROGRESS", "maybe")
    policy = policy_module.load_policy()
    assert (policy.workers, policy.timeout, policy.log_level, policy.progress) == (1, 0.0, "WARNING", True)


def test_module_policy_reloads_from_environment(monkeypatch):
    monkeypatch.setenv("SHAMIR_WORKERS", "3")
    module = importlib.reload(policy_module)
    try:
        assert module.policy.workers == 3
    finally:
        monkeypatch.delenv("SHAMIR_WORKERS")
        importlib.reload(policy_module)


def test_blank_values_keep_defaults(monkeypatch):
    monkeypatch.setenv("SHAMIR_WORKERS", " ")
    monkeypatch.setenv("SHAMIR_TIMEOUT", "")
    policy = policy_module.load_policy()
    assert (policy.workers, policy.timeout) == (1, 0.0)
