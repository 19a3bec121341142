"""conftest.py
Add command line parsing and shared fixtures to pytest.
"""

import pytest
from resume_builder.logging import LoggerFactory
from resume_builder.conftest_helpers import apply_mock_llm_patch
from resume_builder.test_helpers.mock_resume_generator import MockResumeGenerator

# --------------------------------------------------------------
# SETUP TEST LOGGING
# --------------------------------------------------------------

# Integrate logger with pytest
logger = LoggerFactory().get_logger(
    name="pytest_logger",
    logger_type="pytest",
    console=True
)
current_class = None

@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session):
    """Session start header."""
    logger.info("==== PYTEST SESSION START ====")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logstart(nodeid, location):
    """Called at the start of each test."""
    global current_class
    class_name = location[0]
    if class_name != current_class:
        current_class = class_name
        logger.info(f"\n---- TestClass: {current_class} ----")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logreport(report):
    """Called at the end of each test phase (setup/call/teardown)."""
    if report.when != "call":
        return

    status = report.outcome.upper()
    if status == "PASSED":
        logger.info(f"PASSED: {report.nodeid}")
    elif status == "FAILED":
        logger.error(f"FAILED: {report.nodeid}\n{report.longreprtext}")
    elif status == "SKIPPED":
        logger.warning(f"SKIPPED: {report.nodeid}\n{report.longreprtext}")

@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    """Session finish footer."""
    logger.info(f"==== PYTEST SESSION END: exitstatus={exitstatus} ====")


# --------------------------------------------------------------
# SETUP RUN ARGUMENT PARSING
# --------------------------------------------------------------
def pytest_addoption(parser):
    """
    Register a command-line option for selecting the LLM test mode.

    Example usage:
        # Run tests with canned LLM responses (default)
        pytest

        # Allow tests marked for live LLM calls to hit the provider
        pytest --llm-mode=full
    """
    parser.addoption(
        "--llm-mode",
        action="store",
        default="mock_only",
        choices=["mock_only", "full"],
        help=(
            "Set the LLM test mode for pytest. Options:\n"
            "  'mock_only' (default): Use canned responses.\n"
            "  'full': Run live LLM tests."
        ),
    )

@pytest.fixture(scope="session")
def LLM_TEST_MODE(request):
    """
    Returns:
        str: One of 'mock_only', 'full'.
    """
    return request.config.getoption("--llm-mode")


@pytest.fixture(autouse=False)
def FORCE_MOCK_LLM_RESPONSES(monkeypatch):
    """
    Always switch LLMClient into test mode with canned responses.

    Usage:
      - Class-level:
        ```
        @pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
        class TestSuggestionService:
            ...
        ```
      - Function-level:
        ```
        def test_example(FORCE_MOCK_LLM_RESPONSES):
            ...
        ```
    """
    apply_mock_llm_patch(monkeypatch)
    yield


@pytest.fixture
def USE_MOCK_LLM_RESPONSE_SETTING(monkeypatch, LLM_TEST_MODE):
    """
    Conditionally switch LLMClient into test mode based on `LLM_TEST_MODE`.
    Live calls are only made when `--llm-mode=full`.
    """
    if LLM_TEST_MODE != "full":
        apply_mock_llm_patch(monkeypatch)
    yield


# --------------------------------------------------------------
# SHARED RESUME FIXTURES
# --------------------------------------------------------------
@pytest.fixture
def mock_resume_generator():
    return MockResumeGenerator()


@pytest.fixture
def scenario_a_payload():
    """Minimal single-school resume with only a language listed."""
    return {
        "name": "Jane Doe",
        "email": "jane@x.com",
        "education": [{"school": "MIT", "degree": "BS CS", "startDate": "2018", "endDate": "2022"}],
        "experience": [],
        "projects": [],
        "technicalSkills": {"languages": "Python", "frameworks": "", "developerTools": "", "libraries": ""},
        "customSections": [],
    }
