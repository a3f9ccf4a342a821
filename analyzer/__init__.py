"""analyzer

The GitLab CI analysis engine: a small stage framework, the builtin stages,
the :func:`analyzer.engine.analyze` facade and report renderers.
"""
