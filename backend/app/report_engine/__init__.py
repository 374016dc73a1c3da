"""Evaluation report assembly: content nodes, section builders and the assembler.

Entry points live in ``app.report_engine.assembler``.
"""
