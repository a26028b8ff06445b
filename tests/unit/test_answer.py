"""
Tests for prompt construction and the answering step.
"""

import pytest
from fileqa.context.store import AggregateContext
from fileqa.core.config import Settings
from fileqa.core.errors import EmptyContext, GenerationError
from fileqa.ingestion.records import FileDataset
from fileqa.qa.answer import answer_question, build_prompt

PEOPLE = FileDataset(
    provenance="people.csv",
    records=({"name": "ANN", "age": "30"}, {"name": "BOB", "age": "25"}),
    format="csv"
)


class TestBuildPrompt:
    """Tests for build_prompt."""
    
    def test_embeds_context_question_and_limit(self):
        settings = Settings()
        settings.ANSWER_MAX_WORDS = 42
        
        prompt = build_prompt("File: x.csv\nData: []", "What is total?", settings)
        
        assert "File: x.csv" in prompt
        assert prompt.rstrip().endswith("Question: What is total?")
        assert "42 words" in prompt
    
    def test_custom_template(self):
        settings = Settings()
        settings.ANSWER_PROMPT_TEMPLATE = "Q={question} C={context}"
        
        assert build_prompt("ctx", "why?", settings) == "Q=why? C=ctx"
    
    def test_braces_in_context_are_literal(self):
        prompt = build_prompt('Data: [{"a": "{b}"}]', "q", Settings())
        
        assert '[{"a": "{b}"}]' in prompt


class TestAnswerQuestion:
    """Tests for answer_question."""
    
    def test_empty_context_never_calls_generator(self, make_generator):
        generator = make_generator()
        
        with pytest.raises(EmptyContext) as excinfo:
            answer_question(AggregateContext(), "What is total?", generator)
        
        assert generator.prompts == []
        assert "Please provide a file" in str(excinfo.value)
    
    def test_returns_generator_output_verbatim(self, make_generator):
        generator = make_generator(answer="  Total is 55.\nDone.  ")
        
        answer = answer_question(AggregateContext(datasets=(PEOPLE,)), "What is total?", generator)
        
        assert answer == "  Total is 55.\nDone.  "
        assert len(generator.prompts) == 1
        assert "File: people.csv" in generator.prompts[0]
        assert "What is total?" in generator.prompts[0]
    
    def test_generator_failure_wrapped(self, make_generator):
        fault = TimeoutError("backend timed out")
        generator = make_generator(error=fault)
        
        with pytest.raises(GenerationError) as excinfo:
            answer_question(AggregateContext(datasets=(PEOPLE,)), "What is total?", generator)
        
        assert excinfo.value.__cause__ is fault
        assert len(generator.prompts) == 1
    
    @pytest.mark.parametrize("bad_answer", ["", "   ", None])
    def test_unusable_output_is_generation_error(self, bad_answer, make_generator):
        with pytest.raises(GenerationError):
            answer_question(
                AggregateContext(datasets=(PEOPLE,)),
                "q",
                make_generator(answer=bad_answer)
            )
    
    def test_default_generator_is_llm_router(self, monkeypatch):
        monkeypatch.setattr("fileqa.llm.router.generate_text", lambda prompt: "routed")
        
        assert answer_question(AggregateContext(datasets=(PEOPLE,)), "q") == "routed"
