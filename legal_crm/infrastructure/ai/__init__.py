from .openai_case_analysis import OpenAICaseAnalysisService

__all__ = ["OpenAICaseAnalysisService"]
