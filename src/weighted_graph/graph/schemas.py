"""Persisted document schema for weighted graphs.

Field names follow the JSON document format (``fromId``, ``selfLooping``,
...). Python attribute names are snake_case and mapped through aliases.
Non-finite weights are written as the ``Infinity``, ``-Infinity`` and
``NaN`` constants so a saved document always loads back.
"""

from pydantic import BaseModel, ConfigDict, Field


class NodeDocument(BaseModel):
    """A persisted node."""

    model_config = ConfigDict(ser_json_inf_nan="constants")

    id: int
    name: str
    weight: float = 0.0


class EdgeDocument(BaseModel):
    """A persisted edge."""

    model_config = ConfigDict(populate_by_name=True, ser_json_inf_nan="constants")

    id: int
    from_id: int = Field(alias="fromId")
    to_id: int = Field(alias="toId")
    weight: float = 1.0


class GraphDocument(BaseModel):
    """A persisted graph with its derived properties.

    Property fields missing from a document take the values of an
    empty graph.
    """

    model_config = ConfigDict(populate_by_name=True, ser_json_inf_nan="constants")

    nodes: list[NodeDocument] = Field(default_factory=list)
    edges: list[EdgeDocument] = Field(default_factory=list)
    directed: bool = True
    weighted: bool = True
    self_looping: bool = Field(default=False, alias="selfLooping")
    connected: bool = True
    connection_degree: int = Field(default=1, alias="connectionDegree")
    negative_weights: bool = Field(default=False, alias="negativeWeights")
    negative_cycles: bool = Field(default=False, alias="negativeCycles")
