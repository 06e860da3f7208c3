"""Context generation -- turn a document into template-ready records.

* :mod:`~apicontext.generator.context_builder` -- the :func:`transform`
  orchestrator.
* :mod:`~apicontext.generator.operations` -- operation and parameter
  extraction.
* :mod:`~apicontext.generator.schema_flattener` -- named schemas to model
  variables.
* :mod:`~apicontext.generator.security` -- security scheme summaries.
"""

from apicontext.generator.context_builder import transform

__all__ = ["transform"]
