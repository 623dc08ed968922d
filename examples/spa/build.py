"""Build step for the SPA example.

Embeds ``public/`` into ``assets.py`` next to this file.  A real
project would also run its bundler first::

    resource_dir(PUBLIC_DIR).with_hook(NpmBuild("./web").install().run_script("build"))

Run:
    python build.py
"""

from pathlib import Path

from nestbox.build import resource_dir

HERE = Path(__file__).parent
PUBLIC_DIR = HERE / "public"


def build() -> None:
    resource_dir(PUBLIC_DIR).with_generated_filename(HERE / "assets.py").build()


if __name__ == "__main__":
    build()
