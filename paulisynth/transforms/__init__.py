# Copyright 2018-2025 Xanadu Quantum Technologies Inc.

# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at

#     http://www.apache.org/licenses/LICENSE-2.0

# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
The transforms module contains the rewrite rules and the engine that applies
them to a circuit.
"""

from .compile import default_pipeline, full_optimize, optimize
from .graph_rewrite import PhaseGadget, fusion_groups, phase_gadget_graph, synthesize_parity
from .rules import RULES, Replacement, RewriteContext, RuleKind
