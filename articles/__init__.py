"""Article filtering and text resolution."""

from articles.service import ArticleService, evaluate_simple_condition, has_value

__all__ = ["ArticleService", "evaluate_simple_condition", "has_value"]
