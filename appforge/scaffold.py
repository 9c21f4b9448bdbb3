"""React + Vite + TypeScript bootstrap scaffold.

Every new session starts from these entries so the editor has something to
show before the first model response arrives:
- index.html   markup entry point
- src          directory placeholder
- src/main.tsx application entry module
- src/App.tsx  root component, the usual target of the first response
"""
from __future__ import annotations

from .project_tree import ProjectTree

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>AI Generated App</title>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/src/main.tsx"></script>
  </body>
</html>"""

MAIN_TSX = """import React from 'react'
import ReactDOM from 'react-dom/client'
import App from './App'

ReactDOM.createRoot(document.getElementById('root')!).render(
  <React.StrictMode>
    <App />
  </React.StrictMode>,
)"""

APP_TSX = """import React from 'react'

function App() {
  return (
    <div>
      <h1>Hello, AI-generated App!</h1>
    </div>
  )
}

export default App"""

# Ordered (name, kind, content) triples. Tuples all the way down so no
# session can mutate the template another session starts from.
BOOTSTRAP_FILES: tuple[tuple[str, str, str], ...] = (
    ("index.html",   "file",      INDEX_HTML),
    ("src",          "directory", ""),
    ("src/main.tsx", "file",      MAIN_TSX),
    ("src/App.tsx",  "file",      APP_TSX),
)


def new_project_tree() -> ProjectTree:
    """Return a fresh tree holding exactly the bootstrap entries."""
    return ProjectTree.from_entries(BOOTSTRAP_FILES)
