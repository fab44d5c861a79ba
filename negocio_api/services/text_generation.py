"""
Text Generation

Copy suggestions for the storefront's about/mission/vision blocks. The
bundled generator returns canned text; a model-backed implementation only
has to provide `generate`.
"""
from abc import ABC, abstractmethod


class TextGenerator(ABC):

    @abstractmethod
    def generate(self, tipo: str, prompt: str) -> str:
        """Return text for the content block `tipo`."""


class TemplateTextGenerator(TextGenerator):
    """Fixed Spanish copy per block; unknown blocks echo the prompt."""

    TEMPLATES = {
        "sobre-nosotros": (
            "Somos una empresa dedicada a brindar los mejores productos y servicios. "
            "Con años de experiencia en el mercado, nos caracterizamos por nuestra "
            "calidad y atención al cliente."
        ),
        "mision": (
            "Nuestra misión es ofrecer productos de la más alta calidad, superando las "
            "expectativas de nuestros clientes y contribuyendo al desarrollo de nuestra comunidad."
        ),
        "vision": (
            "Ser líderes en nuestro sector, reconocidos por nuestra innovación, "
            "compromiso y excelencia en el servicio."
        ),
    }

    def generate(self, tipo: str, prompt: str) -> str:
        return self.TEMPLATES.get(tipo, prompt)
