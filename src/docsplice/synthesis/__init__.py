from docsplice.synthesis.openai_synthesizer import OpenAICommentSynthesizer, SynthesisError, comment_tool

__all__ = [
    "OpenAICommentSynthesizer",
    "SynthesisError",
    "comment_tool",
]
