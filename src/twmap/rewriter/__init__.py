from twmap.rewriter.rewriter import plan, rewrite, rewrite_file

__all__ = ["plan", "rewrite", "rewrite_file"]
