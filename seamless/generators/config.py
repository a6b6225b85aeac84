"""Configuration settings for scene generation."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Default credential for the command line only; the generators never read it
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")

# Models
PLANNER_MODEL = os.environ.get("GEMINI_AI_MODEL", "gemini-2.5-flash")

# Low temperature keeps consecutive batches stylistically stable
GENERATION_TEMPERATURE = 0.4
RESPONSE_MIME_TYPE = "application/json"

# Key probe
PROBE_TIMEOUT_SEC = float(os.environ.get("GEMINI_PROBE_TIMEOUT_SEC", "15"))

# Block only high-severity content, dramatic scenes need medium
SAFETY_SETTINGS = {
    "HARM_CATEGORY_HARASSMENT": "BLOCK_ONLY_HIGH",
    "HARM_CATEGORY_HATE_SPEECH": "BLOCK_ONLY_HIGH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT": "BLOCK_ONLY_HIGH",
    "HARM_CATEGORY_DANGEROUS_CONTENT": "BLOCK_ONLY_HIGH",
}
