"""Entry point for running the face corpus tools as a module.

Usage:
    python -m face_corpus collect <cascade> <data_path> <device_id>
    python -m face_corpus recognize <cascade> <data_path> <in_image> <out_info>
    python -m face_corpus portraits <data_path> <name> <info_path>
"""

from .cli import main

if __name__ == "__main__":
    main()
