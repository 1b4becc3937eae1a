"""UI components for the PharmaControl Streamlit app.

Each module inside `ui` focuses purely on presentation / user interaction
logic, delegating data manipulation to the `inventory` package and AI calls to
the `analysis` package.
"""
