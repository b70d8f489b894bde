"""
End-to-end pipeline tests

Tests the CLI stages: studio source file -> tokens -> rendered output file.
"""

import importlib
from argparse import Namespace

import pytest
from loguru import logger

import studiolex.lib.log
from studiolex.__main__ import (
    env_check,
    output_render,
    results_report,
    source_read,
    source_tokenize,
)
from studiolex.lib.lexer import get_lexer
from studiolex.lib.log import logger_configure, state_connectToLogger, verbosity_get
from studiolex.lib.tokenizer import Tokenizer
from studiolex.models.state import ProgramState, pipeline
from studiolex.models.tokens import Category


SOURCE = "hab build ./plan.sh\nsl | grep $(hab svc status)\n"


def state_make(tmp_path, **kwargs):
    inputdir = tmp_path / "in"
    inputdir.mkdir(exist_ok=True)
    (inputdir / "setup.studio").write_text(SOURCE, encoding="utf-8")
    options = Namespace(inputFile="setup.studio", verbosity=0, **kwargs)
    return ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=tmp_path / "out"
    )


class TestPipeline:
    """Test the full stage pipeline"""

    def test_tokens_output(self, tmp_path):
        state = pipeline(
            state_make(tmp_path, format="tokens"),
            env_check,
            source_read,
            source_tokenize,
            output_render,
            results_report,
        )
        assert state.envOK
        assert state.outputFile == tmp_path / "out" / "setup.studio.tokens"
        listing = state.outputFile.read_text(encoding="utf-8")
        assert listing.startswith("BUILTIN\t'hab '\nBUILTIN\t'build'\n")
        assert "".join(t.text for t in state.tokens) == SOURCE

    def test_html_output(self, tmp_path):
        state = pipeline(
            state_make(tmp_path, format="html", style="default"),
            env_check,
            source_read,
            source_tokenize,
            output_render,
        )
        assert state.outputFile.name == "setup.studio.html"
        assert '<div class="highlight"' in state.outputFile.read_text(encoding="utf-8")

    def test_html_output_scans_once(self, tmp_path, monkeypatch):
        """HTML rendering reuses the tokens from source_tokenize"""
        scans = []
        iterate = Tokenizer.tokens_iterate

        def iterate_count(self, text):
            scans.append(text)
            return iterate(self, text)

        monkeypatch.setattr(Tokenizer, "tokens_iterate", iterate_count)
        state = pipeline(
            state_make(tmp_path, format="html", style="default"),
            env_check,
            source_read,
            source_tokenize,
            output_render,
        )
        assert scans == [SOURCE]
        assert "plan.sh" in state.renderedOutput

    def test_wordlists_option(self, tmp_path):
        words = tmp_path / "words.yaml"
        words.write_text("builtins: [grep]\n")
        state = pipeline(
            state_make(tmp_path, format="tokens", wordlists=str(words)),
            env_check,
            source_read,
            source_tokenize,
        )
        assert state.builtins == ["grep"]
        builtins = [t.text.strip() for t in state.tokens if t.category == Category.BUILTIN]
        assert builtins == ["grep"]

    def test_stages_do_not_mutate_input(self, tmp_path):
        initial = state_make(tmp_path)
        checked = env_check(initial)
        assert checked is not initial
        assert initial.envOK is False
        assert checked.envOK is True


class TestPipelineErrors:
    """Test stage failures exit with status 1"""

    def test_missing_input_file(self, tmp_path):
        state = state_make(tmp_path)
        state.inputFile = "absent.studio"
        with pytest.raises(SystemExit) as excinfo:
            env_check(state)
        assert excinfo.value.code == 1

    def test_bad_wordlists_file(self, tmp_path):
        state = state_make(tmp_path, wordlists=str(tmp_path / "absent.yaml"))
        state = source_read(env_check(state))
        with pytest.raises(SystemExit) as excinfo:
            source_tokenize(state)
        assert excinfo.value.code == 1

    def test_render_without_tokens(self, tmp_path):
        state = env_check(state_make(tmp_path))
        with pytest.raises(SystemExit):
            output_render(state)


class TestLoggingContext:
    """Test verbosity binding used by LOG()"""

    def test_connected_state_sets_verbosity(self):
        state_connectToLogger(ProgramState(verbosity=3))
        assert verbosity_get() == 3
        state_connectToLogger(None)
        assert verbosity_get() == 0

    def test_import_keeps_host_handlers(self):
        """Importing the library leaves sinks added by the host in place"""
        seen = []
        sink_id = logger.add(lambda message: seen.append(str(message)), level="INFO")
        try:
            importlib.reload(studiolex.lib.log)
            list(get_lexer().get_tokens("hab build\n"))
            logger.info("host message")
        finally:
            logger.remove(sink_id)
        assert any("host message" in line for line in seen)

    def test_configure_installs_single_handler(self, monkeypatch):
        """The CLI setup swaps every existing handler for one stderr sink"""
        calls = []
        monkeypatch.setattr(logger, "remove", lambda *a: calls.append(("remove", a)))
        monkeypatch.setattr(logger, "add", lambda *a, **kw: calls.append(("add", kw)))
        logger_configure()
        assert calls[0] == ("remove", ())
        assert calls[1][0] == "add"
        assert calls[1][1]["format"] == studiolex.lib.log.logger_format
