"""Serviços do consultor (LLM, orquestração, CRM)"""
