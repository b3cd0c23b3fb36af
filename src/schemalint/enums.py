"""
Enumerations for schemalint.

These tag the concrete syntax shapes the passes distinguish, so rules can
branch on an explicit variant instead of re-inspecting node classes.
"""

from enum import Enum


class TypeForm(str, Enum):
  """
  How the type of a schema literal is spelled at its construction site.
  """

  SELECTOR = "selector"  # schema.Schema(...)
  PLAIN = "plain"  # Schema(...)


class DeclForm(str, Enum):
  """
  Kind of declaration that gives a receiver its static type.
  """

  FIELD = "field"  # def f(d: ResourceData)
  VARIABLE = "variable"  # d: ResourceData = ...

