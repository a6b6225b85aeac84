"""Batch scene generation engine built on Gemini and LangGraph."""
