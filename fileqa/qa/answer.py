"""
Question answering over the aggregate context.
"""

import time
from typing import Callable, Optional
from fileqa.context.serializer import serialize_context
from fileqa.context.store import AggregateContext
from fileqa.core.config import Settings, settings as default_settings
from fileqa.core.errors import EmptyContext, GenerationError
from fileqa.core.logging import setup_logger

logger = setup_logger()

TextGenerator = Callable[[str], str]


def build_prompt(
    serialized_context: str,
    question: str,
    settings: Optional[Settings] = None
) -> str:
    """
    Embed the serialized context and the literal question in the
    configured instruction template.
    
    Args:
        serialized_context: Output of serialize_context
        question: User question, inserted verbatim
        settings: Settings providing the template and word limit
        
    Returns:
        Prompt text
    """
    settings = settings or default_settings
    return settings.ANSWER_PROMPT_TEMPLATE.format(
        context=serialized_context,
        question=question,
        max_words=settings.ANSWER_MAX_WORDS
    )


def answer_question(
    context: AggregateContext,
    question: str,
    generate: Optional[TextGenerator] = None,
    settings: Optional[Settings] = None
) -> str:
    """
    Answer a question using only the loaded datasets.
    
    Args:
        context: Snapshot of the loaded datasets
        question: User question
        generate: Text generator (defaults to the configured LLM provider)
        settings: Settings for the prompt template
        
    Returns:
        The generator's answer, verbatim
        
    Raises:
        EmptyContext: If nothing has been ingested; the generator is not called
        GenerationError: If the generator fails or returns unusable output
    """
    if context.is_empty:
        logger.info("Question received with no datasets loaded")
        raise EmptyContext()
    
    if generate is None:
        from fileqa.llm.router import generate_text
        generate = generate_text
    
    serialized = serialize_context(context)
    prompt = build_prompt(serialized, question, settings)
    
    logger.info(
        f"Answering question over {len(context)} datasets - "
        f"context_chars: {len(serialized)}, prompt_chars: {len(prompt)}"
    )
    
    start_time = time.time()
    try:
        answer = generate(prompt)
    except GenerationError:
        raise
    except Exception as e:
        logger.error(f"Error generating answer: {type(e).__name__}: {str(e)}")
        raise GenerationError(f"Error generating answer: {str(e)}") from e
    
    if not isinstance(answer, str) or not answer.strip():
        raise GenerationError("Text generation returned an empty answer")
    
    logger.info(f"Answer generated in {int((time.time() - start_time) * 1000)} ms")
    return answer
