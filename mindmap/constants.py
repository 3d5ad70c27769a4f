"""
Shared constants for the editing core.

Placement values are defaults; EditorSettings can override the jitter and
vertical step at startup.
"""

# The document starts with a single anchor node
ROOT_NODE_ID = '1'
ROOT_LABEL = 'Central Idea'
ROOT_POSITION = (250.0, 250.0)

# Label given to nodes created from the toolbar or a node's "+" button
DEFAULT_LABEL = 'New Idea'

# New children land below the parent, shifted by up to +/- JITTER_X
JITTER_X = 50.0
VERTICAL_STEP = 100.0

# Hex characters appended to pasted/connected ids
ID_SUFFIX_LENGTH = 8

# Style keys the toolbar can change
NODE_STYLE_PROPERTIES = ('fontSize', 'fontStyle', 'fontColor')
EDGE_STYLE_PROPERTIES = ('strokeColor',)

# The toolbar labels the edge colour "Branch color" and sends 'edgeColor'
STYLE_ALIASES = {'edgeColor': 'strokeColor'}

DEFAULT_NODE_STYLE = {
    'fontSize': '12px',
    'fontStyle': 'normal',
    'fontColor': '#000',
}
DEFAULT_EDGE_STYLE = {
    'strokeColor': '#000',
}
