"""
Shared keyword catalog for AI topic trend tracking.
"""

DEFAULT_AI_KEYWORDS = [
    "GPT", "LLM", "Large Language Model", "ChatGPT", "Gemini", "Claude",
    "OpenAI", "Anthropic", "Deep Learning", "Neural Network", "Machine Learning",
    "Computer Vision", "Natural Language Processing", "NLP", "Transformer",
    "Diffusion", "Stable Diffusion", "DALL-E", "Generative AI", "AI Agent",
    "Reinforcement Learning", "Multimodal", "RAG", "Vector Database",
    "Fine-tuning", "Prompt Engineering",
]
