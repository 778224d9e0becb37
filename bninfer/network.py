"""
In-memory discrete Bayesian network.

The inference engines only need two things from a network: a topological
ordering of its variables and a conditional-probability lookup. This module
provides a concrete network that satisfies that contract, with the DAG held
in a networkx graph and one conditional probability table per node.
"""

from __future__ import annotations

from itertools import product
from math import isclose
from typing import Dict, Hashable, Iterable, List, Mapping, Sequence, Tuple, Union

from bninfer.errors import UndefinedProbabilityError, UnknownVariableError
from bninfer.types import Assignment, RandomVariable, VariableKey

try:
    import networkx as nx
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "The network structure requires networkx. Install with: pip install networkx"
    ) from exc

# A CPT row: {value: p}, probabilities in domain order, or P(True) for booleans.
RowLike = Union[Mapping[Hashable, float], Sequence[float], float]
CPTLike = Mapping[Tuple[Hashable, ...], RowLike]

ROW_SUM_TOL = 1e-9


class BayesianNetwork:
    """
    Directed acyclic graph of random variables with per-node CPTs.

    Nodes are added parents-first, so the graph stays acyclic by construction;
    ``topological_order`` still checks it because ``graph`` can be handed to
    external tooling.
    """

    def __init__(self) -> None:
        self._graph = nx.DiGraph()
        self._variables: Dict[str, RandomVariable] = {}
        self._parents: Dict[str, Tuple[RandomVariable, ...]] = {}
        self._cpts: Dict[str, Dict[Tuple[Hashable, ...], Dict[Hashable, float]]] = {}

    def add_variable(
        self,
        variable: RandomVariable,
        parents: Sequence[VariableKey] = (),
        cpt: Union[CPTLike, RowLike, None] = None,
    ) -> RandomVariable:
        """
        Register a variable with its parents and conditional probability table.

        Args:
            variable: Variable to add. Its name must be new to the network.
            parents: Parent variables (or names), already registered. The
                order fixes the order of parent values in CPT keys.
            cpt: Mapping from a tuple of parent values to a row. For a root
                variable the row itself may be passed directly.

        Returns:
            The registered variable.

        Raises:
            ValueError: If the name is taken or the CPT is incomplete or
                does not sum to one.
            UnknownVariableError: If a parent is not registered.
        """
        if variable.name in self._variables:
            raise ValueError(f"Variable {variable.name!r} is already in the network")
        parent_vars = tuple(self.variable(p) for p in parents)
        if len({p.name for p in parent_vars}) != len(parent_vars):
            raise ValueError(f"Variable {variable.name!r} has duplicate parents")
        if cpt is None:
            raise ValueError(f"Variable {variable.name!r} needs a conditional probability table")
        if not parent_vars and not (isinstance(cpt, Mapping) and () in cpt):
            cpt = {(): cpt}
        if not isinstance(cpt, Mapping):
            raise ValueError(
                f"CPT for {variable.name!r} must map parent values to rows"
            )

        table = self._build_table(variable, parent_vars, cpt)

        self._variables[variable.name] = variable
        self._parents[variable.name] = parent_vars
        self._cpts[variable.name] = table
        self._graph.add_node(variable.name, variable=variable)
        for parent in parent_vars:
            self._graph.add_edge(parent.name, variable.name)
        return variable

    @staticmethod
    def _normalize_row(variable: RandomVariable, row: RowLike) -> Dict[Hashable, float]:
        if isinstance(row, Mapping):
            unknown = [v for v in row if v not in variable.domain]
            if unknown:
                raise ValueError(f"CPT row for {variable.name!r} has unknown values {unknown!r}")
            out = {v: float(row.get(v, 0.0)) for v in variable.domain}
        elif isinstance(row, (int, float)):
            if not variable.is_boolean:
                raise ValueError(
                    f"A single probability is only allowed for boolean variables, not {variable.name!r}"
                )
            p = float(row)
            out = {True: p, False: 1.0 - p}
        else:
            probs = [float(x) for x in row]
            if len(probs) != len(variable.domain):
                raise ValueError(
                    f"CPT row for {variable.name!r} has {len(probs)} entries, "
                    f"expected {len(variable.domain)}"
                )
            out = dict(zip(variable.domain, probs))

        if any(p < 0.0 or p > 1.0 for p in out.values()):
            raise ValueError(f"CPT row for {variable.name!r} has probabilities outside [0, 1]")
        if not isclose(sum(out.values()), 1.0, abs_tol=ROW_SUM_TOL):
            raise ValueError(f"CPT row for {variable.name!r} must sum to 1.0")
        return out

    def _build_table(
        self,
        variable: RandomVariable,
        parents: Tuple[RandomVariable, ...],
        cpt: CPTLike,
    ) -> Dict[Tuple[Hashable, ...], Dict[Hashable, float]]:
        table: Dict[Tuple[Hashable, ...], Dict[Hashable, float]] = {}
        for raw_key, row in cpt.items():
            key = raw_key if isinstance(raw_key, tuple) else (raw_key,)
            if len(key) != len(parents):
                raise ValueError(
                    f"CPT key {raw_key!r} for {variable.name!r} must have {len(parents)} parent values"
                )
            for parent, value in zip(parents, key):
                if value not in parent.domain:
                    raise ValueError(
                        f"CPT key {raw_key!r} for {variable.name!r} has value {value!r} "
                        f"outside the domain of {parent.name!r}"
                    )
            table[key] = self._normalize_row(variable, row)

        missing = [
            combo for combo in product(*(p.domain for p in parents)) if combo not in table
        ]
        if missing:
            raise ValueError(
                f"CPT for {variable.name!r} is missing rows for parent values {missing[:3]!r}"
            )
        return table

    @property
    def variables(self) -> List[RandomVariable]:
        return list(self._variables.values())

    @property
    def graph(self) -> nx.DiGraph:
        return self._graph.copy()

    def variable(self, key: VariableKey) -> RandomVariable:
        name = key.name if isinstance(key, RandomVariable) else str(key)
        try:
            return self._variables[name]
        except KeyError as exc:
            raise UnknownVariableError(f"Unknown variable: {name!r}") from exc

    def parents(self, key: VariableKey) -> Tuple[RandomVariable, ...]:
        return self._parents[self.variable(key).name]

    def children(self, key: VariableKey) -> List[RandomVariable]:
        name = self.variable(key).name
        return [self._variables[c] for c in self._graph.successors(name)]

    def topological_order(self) -> List[RandomVariable]:
        """
        Variables ordered so that every parent precedes its children.

        Raises:
            ValueError: If the graph has a cycle.
        """
        if not nx.is_directed_acyclic_graph(self._graph):
            raise ValueError("Graph has at least one cycle")
        return [self._variables[name] for name in nx.topological_sort(self._graph)]

    def conditional_probability(self, variable: VariableKey, assignment: Assignment) -> float:
        """
        Return P(variable = assignment[variable] | parents as in assignment).

        Raises:
            UnknownVariableError: If the variable is not in the network.
            UndefinedProbabilityError: If the variable or one of its parents
                is unassigned, or the assigned value has no CPT entry.
        """
        var = self.variable(variable)
        if var not in assignment:
            raise UndefinedProbabilityError(f"Variable {var.name!r} is not assigned")
        missing = [p.name for p in self._parents[var.name] if p not in assignment]
        if missing:
            raise UndefinedProbabilityError(
                f"Cannot resolve P({var.name} | parents): unassigned parents {missing!r}"
            )
        key = tuple(assignment[p] for p in self._parents[var.name])
        value = assignment[var]
        try:
            return self._cpts[var.name][key][value]
        except (KeyError, TypeError) as exc:
            raise UndefinedProbabilityError(
                f"No CPT entry for {var.name}={value!r} given parents {key!r}"
            ) from exc

    def joint_probability(self, assignment: Assignment) -> float:
        """Product of every node's conditional probability under a complete assignment."""
        p = 1.0
        for var in self.topological_order():
            p *= self.conditional_probability(var, assignment)
        return p

    def __contains__(self, key: object) -> bool:
        if isinstance(key, RandomVariable):
            return key.name in self._variables
        if isinstance(key, str):
            return key in self._variables
        return False

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        return f"BayesianNetwork(variables={list(self._variables)!r})"


def build_network(
    nodes: Iterable[Tuple[RandomVariable, Sequence[VariableKey], Union[CPTLike, RowLike]]],
) -> BayesianNetwork:
    """Build a network from ``(variable, parents, cpt)`` triples in parents-first order."""
    network = BayesianNetwork()
    for variable, parents, cpt in nodes:
        network.add_variable(variable, parents, cpt)
    return network
