import pytest

from postfix_interp.config import ENV_DIAGNOSTICS, ENV_LOG_LEVEL, ENV_SYMBOL_CAPACITY
from postfix_interp.symtab import SymbolTable
from postfix_interp.tree import NodeAllocator


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")


@pytest.fixture(autouse=True)
def clean_postfix_env(monkeypatch):
    for name in (ENV_SYMBOL_CAPACITY, ENV_DIAGNOSTICS, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def allocator():
    return NodeAllocator()


@pytest.fixture
def symbols():
    return SymbolTable()
