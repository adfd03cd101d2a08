from comment_miner.classifier.http import HttpCommentClassifier

__all__ = ["HttpCommentClassifier"]
