from __future__ import annotations

EXPECTED_WORD_COUNT = 51
COORDINATE_RANGE = 50

PROMPT_TEMPLATE = """
You are an advanced Word2Vec model simulator.
Your task is to take a target word and generate a list of {related_count} semantically related words.
You must also include the target word itself in the list.
For each word (the target word and the {related_count} related words), provide 2D coordinates (x, y).
The target word '{target}' should ideally be positioned at or near the origin (0,0), for example, {{ "word": "{target}", "x": 0, "y": 0 }}.
Related words should be positioned such that their distance and direction from the target word (and from each other) reflect their semantic relationships, similar to how Word2Vec embeddings would project into 2D space.
The x and y coordinate values should range approximately from -{limit} to {limit}.

Output ONLY a valid JSON array of objects. Each object in the array must have the following three keys:
- "word": string (the word itself)
- "x": number (the x-coordinate)
- "y": number (the y-coordinate)

Do not include any explanatory text, greetings, or any other content outside of the JSON array.
The JSON array should contain exactly {total} items: the target word and {related_count} related words.

Example for target word 'technology' (this example shows fewer words for brevity, but you should generate {total}):
[
  {{ "word": "technology", "x": 0, "y": 0 }},
  {{ "word": "innovation", "x": 10, "y": 5 }},
  {{ "word": "computer", "x": -8, "y": 12 }},
  {{ "word": "software", "x": -15, "y": -3 }},
  {{ "word": "science", "x": 20, "y": -8 }}
]

Now, generate this for the target word: '{target}'
""".strip()


def build_prompt(target_word: str) -> str:
    """Return the instruction text asking the model for ``target_word``'s neighbourhood.

    The caller is expected to pass an already trimmed, non-empty word.
    """
    return PROMPT_TEMPLATE.format(
        target=target_word,
        total=EXPECTED_WORD_COUNT,
        related_count=EXPECTED_WORD_COUNT - 1,
        limit=COORDINATE_RANGE,
    )
