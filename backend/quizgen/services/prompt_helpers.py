"""
Prompt helpers for remote generation: document excerpt plus explicit JSON formatting instructions.
"""

SYSTEM_PROMPT = (
    "You are an expert educational content creator. You write clear multiple choice questions "
    "grounded only in the supplied document. Output valid JSON only, no markdown and no other text."
)

DEFAULT_PROMPT_CHARS = 4000


def build_generation_prompt(text: str, question_count: int, max_chars: int = DEFAULT_PROMPT_CHARS) -> str:
    """Prompt from the first max_chars of text asking for exactly question_count questions."""
    excerpt = text[:max_chars]
    if len(text) > max_chars:
        excerpt += "..."
    return f"""Using the RAG (Retrieval-Augmented Generation) approach:

1. RETRIEVE: Analyze the following document and identify key information
2. AUGMENT: Enhance your understanding with educational best practices
3. GENERATE: Create {question_count} high-quality multiple choice questions

Document:
{excerpt}

Requirements:
- Generate exactly {question_count} questions
- Each question should have exactly 4 options
- Include explanations for correct answers
- Mix difficulty levels (40% easy, 40% medium, 20% hard)
- Cover different aspects: facts, concepts, analysis, inference

Format your response as JSON:
{{
  "questions": [
    {{
      "id": 1,
      "question": "Question text?",
      "options": ["Correct answer", "Wrong 1", "Wrong 2", "Wrong 3"],
      "correctAnswer": 0,
      "explanation": "Why this is correct...",
      "difficulty": "easy"
    }}
  ]
}}
"""
