"""
Utility functions for the Gale-Church aligner.
"""


def build_config_from_args(args):
    """Build TextAligner config from an argparse Namespace.

    Returns: config_dict
    """
    config = {
        "paragraph_mode": getattr(args, "paragraph_mode", None),
        "char_ratio": getattr(args, "char_ratio", None),
        "variance": getattr(args, "variance", None),
    }
    if getattr(args, "no_paragraph_correction", False):
        config["correct_paragraphs"] = False

    # Remove None values to avoid overriding defaults
    return {k: v for k, v in config.items() if v is not None}
