"""
SellerPro Listing Tool Package

A listing workspace for marketplace sellers.
Back-solves a listing price from a target settlement and fee structure, and
drafts SEO listing copy through a generative-AI text API.
"""

__version__ = "1.0.0"
