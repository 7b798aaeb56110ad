"""Utility functions for the Survey API"""
from .json_helpers import sanitize_for_json, response_to_dict, user_response_to_dict

__all__ = ["sanitize_for_json", "response_to_dict", "user_response_to_dict"]
