# tests/router/test_prompt_builder.py
import pytest
from capitra.processor.models import Chapter, Job, TranslationProfile
from capitra.router.prompt_builder import (
    build_prompt,
    build_system_instruction,
    build_user_prompt,
)


def make_chapter(title="Chapter 1", text="It was a dark night.") -> Chapter:
    return Chapter(id="chapter-0", index=0, title=title, original_text=text)


def make_job(
    source="Inglês",
    target="Português (Brasil)",
    profile=TranslationProfile.FIEL,
    context="",
    chapter_count=1,
) -> Job:
    return Job(
        source_language = source,
        target_language = target,
        profile         = profile,
        context         = context,
        chapter_count   = chapter_count,
    )


class TestSystemInstruction:

    @pytest.mark.parametrize("profile, marker", [
        (TranslationProfile.LITERARIA, "tradutor literário premiado"),
        (TranslationProfile.FIEL,      "tradutor técnico e preciso"),
        (TranslationProfile.NATURAL,   "naturalidade e fluidez"),
    ])
    def test_par_afinado_usa_la_voz_del_perfil(self, profile, marker):
        instruction = build_system_instruction(make_job(profile=profile))
        assert instruction.startswith("Você é um tradutor")
        assert marker in instruction

    def test_par_afinado_prohibe_diminutivos(self):
        instruction = build_system_instruction(make_job())
        assert "diminutivos" in instruction

    def test_otro_par_usa_voz_generica(self):
        instruction = build_system_instruction(make_job(target="Espanhol"))

        assert "tradutor especialista multilíngue" in instruction
        assert "de Inglês para Espanhol" in instruction
        assert "diminutivos" not in instruction

    def test_otro_par_ignora_el_perfil(self):
        literaria = build_system_instruction(
            make_job(target="Espanhol", profile=TranslationProfile.LITERARIA)
        )
        natural = build_system_instruction(
            make_job(target="Espanhol", profile=TranslationProfile.NATURAL)
        )
        assert literaria == natural

    @pytest.mark.parametrize("source, target", [
        ("Inglês", "Português (Brasil)"),
        ("Francês", "Alemão"),
    ])
    def test_regla_de_terceros_idiomas_siempre_presente(self, source, target):
        instruction = build_system_instruction(make_job(source=source, target=target))

        assert "TERCEIRO idioma" in instruction
        assert f"para o idioma de destino ({target})" in instruction
        # El caso con glosa del autor: usar la glosa, no el fragmento original
        assert "tradução fornecida pelo autor" in instruction


class TestUserPrompt:

    def test_titulo_va_antes_del_contenido(self):
        prompt = build_user_prompt(make_chapter(), make_job())
        assert "Chapter 1\n\nIt was a dark night." in prompt

    def test_pide_conservar_el_titulo_como_primera_linea(self):
        prompt = build_user_prompt(make_chapter(), make_job())
        assert "incluindo o título do capítulo no início" in prompt
        assert "seguido por duas quebras de linha" in prompt

    def test_solo_texto_traducido_sin_comentarios(self):
        prompt = build_user_prompt(make_chapter(), make_job())
        assert "Forneça APENAS o texto traduzido" in prompt

    def test_contexto_se_incluye_si_existe(self):
        prompt = build_user_prompt(
            make_chapter(),
            make_job(context="Romance policial dos anos 20"),
        )
        assert "---INÍCIO DO CONTEXTO---\nRomance policial dos anos 20" in prompt

    @pytest.mark.parametrize("context", ["", "   \n"])
    def test_sin_contexto_no_hay_bloque(self, context):
        prompt = build_user_prompt(make_chapter(), make_job(context=context))
        assert "CONTEXTO" not in prompt

    def test_varios_capitulos_pide_consistencia(self):
        prompt = build_user_prompt(make_chapter(), make_job(chapter_count=3))

        assert "segmento de um texto maior" in prompt
        assert "Não adicione introduções ou conclusões" in prompt

    def test_un_solo_capitulo_es_texto_completo(self):
        prompt = build_user_prompt(make_chapter(), make_job(chapter_count=1))

        assert "traduzindo um texto completo" in prompt
        assert "segmento de um texto maior" not in prompt

    def test_llaves_en_el_contenido_no_rompen_el_formato(self):
        prompt = build_user_prompt(make_chapter(text="Use {name} and {{x}}"), make_job())
        assert "Use {name} and {{x}}" in prompt


class TestBuildPrompt:

    def test_es_determinista(self):
        chapter = make_chapter()
        job     = make_job(context="ctx", chapter_count=2)

        assert build_prompt(chapter, job) == build_prompt(chapter, job)

    def test_separa_sistema_y_usuario(self):
        prompt = build_prompt(make_chapter(), make_job())

        assert "It was a dark night." in prompt.user_prompt
        assert "It was a dark night." not in prompt.system_instruction
