"""
Pipeline modules for the plant-question chat flow.

Stage 1: Intent extraction   (intent.py)
Stage 2: Retrieval           (filter_compiler.py, plant_retriever.py, tip_matcher.py)
Stage 3: Response            (response_composer.py)

Static configuration: catalog.py
Orchestrated by: orchestrator.py
"""
