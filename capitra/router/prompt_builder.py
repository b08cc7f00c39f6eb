# router/prompt_builder.py
from capitra.languages import is_specialized_pair
from capitra.processor.models import Chapter, Job, TranslationProfile
from capitra.router.models import TranslationPrompt


_PROFILE_VOICES: dict[TranslationProfile, str] = {
    TranslationProfile.LITERARIA: (
        "Você é um tradutor literário premiado, um mestre em transpor a alma de uma obra "
        "do inglês para o português do Brasil. Sua especialidade é realizar traduções que "
        "são obras de arte em si. Você captura todas as nuances culturais, gírias, expressões "
        "idiomáticas, trocadilhos, jogos de palavras, alusões, xingamentos e, o mais "
        "importante, o tom, o ritmo e o estilo únicos do autor. Sua tradução não é apenas "
        "correta, é evocativa. TRADUZA TUDO. Não deixe termos em inglês, a menos que seja um "
        "nome próprio ou um termo para o qual não exista absolutamente nenhum equivalente que "
        "mantenha o impacto. Sua tradução deve soar como se a obra tivesse sido originalmente "
        "sonhada e escrita em português por um grande autor brasileiro."
    ),
    TranslationProfile.FIEL: (
        "Você é um tradutor técnico e preciso. Sua tarefa é traduzir textos do inglês para o "
        "português do Brasil da forma mais literal e fiel possível, mantendo a estrutura da "
        "frase original sempre que viável. Priorize a exatidão terminológica sobre a fluidez. "
        "Evite interpretações criativas."
    ),
    TranslationProfile.NATURAL: (
        "Você é um tradutor focado em naturalidade e fluidez para o leitor brasileiro. Sua "
        "tarefa é traduzir textos do inglês para o português do Brasil de uma forma que soe "
        "completamente natural e coloquial. Adapte expressões idiomáticas e gírias para seus "
        "equivalentes mais comuns no Brasil. Priorize a clareza e a facilidade de leitura "
        "sobre a fidelidade estrita à estrutura original. A tradução deve parecer escrita por "
        "um falante nativo para outro."
    ),
}

_GENERIC_VOICE = (
    "Você é um tradutor especialista multilíngue. Sua tarefa é traduzir textos de "
    "{source_lang} para {target_lang} com a maior precisão e naturalidade possível, "
    "respeitando o contexto fornecido."
)

_DIMINUTIVE_RULE = """

REGRA CRÍTICA E INQUEBRÁVEL: Sob nenhuma circunstância use diminutivos (terminações como "-inho", "-inha"). Por exemplo, traduza "little boy" como "menino pequeno" e NUNCA como "menininho". Traduza "little house" como "casa pequena" e NUNCA como "casinha". Esta regra deve ser seguida estritamente."""

_THIRD_LANGUAGE_RULE = """

**REGRA MESTRA DE TRADUÇÃO DE IDIOMAS:** Sua tarefa principal é traduzir TODO o texto do idioma de origem ({source_lang}) para o idioma de destino ({target_lang}).

**REGRA CRÍTICA PARA TERCEIROS IDIOMAS:** Se o texto original contiver palavras, frases ou sentenças em um TERCEIRO idioma (que não seja {source_lang} nem {target_lang}, como Latim, Francês, Alemão, Grego, Hebraico etc.), você DEVE OBRIGATORIAMENTE traduzir esse trecho para {target_lang}. Não mantenha NADA no terceiro idioma. 100% do texto final deve estar em {target_lang}.

**Cenários de Aplicação:**
1.  **Trecho em terceiro idioma COM tradução do próprio autor:** Se o texto em {source_lang} contém um trecho em um terceiro idioma e o autor já o traduziu logo em seguida (ex: "...'alea iacta est', which means 'the die is cast'..."), IGNORE o trecho no terceiro idioma e use apenas a tradução fornecida pelo autor para gerar o texto em {target_lang}, sem redundâncias.
2.  **Trecho em terceiro idioma SEM tradução do autor:** Traduza o trecho diretamente para {target_lang}.

**Exemplo (Cenário 2):**
Texto Original ({source_lang}): `Then he said, 'Alea iacta est'.`
Tradução ({target_lang}): `Então ele disse, 'A sorte está lançada'.` (CORRETO)
Tradução ({target_lang}): `Então ele disse, 'Alea iacta est'.` (ERRADO: a frase foi mantida no idioma original)

A aplicação rigorosa desta regra de tradução total é fundamental para a tarefa."""

_CONTEXT_BLOCK = (
    "Para a tradução a seguir, considere o seguinte contexto sobre a obra: \n\n"
    "---INÍCIO DO CONTEXTO---\n{context}\n---FIM DO CONTEXTO---\n\n"
)

_MULTI_CHAPTER_NOTICE = (
    "\n\nAVISO IMPORTANTE: Você está traduzindo um segmento de um texto maior. Mantenha a "
    "consistência de tom, estilo e terminologia com o contexto fornecido e com os outros "
    "capítulos. Não adicione introduções ou conclusões como se este fosse o texto completo."
)

_SINGLE_TEXT_NOTICE = "\n\nAVISO IMPORTANTE: Você está traduzindo um texto completo."

_USER_PROMPT = """
{context_block}{chapter_notice}
Traduza o seguinte texto de {source_lang} para {target_lang}, **incluindo o título do capítulo no início**. O resultado deve começar com o título traduzido, seguido por duas quebras de linha e então o conteúdo do capítulo.

---INÍCIO DO TEXTO A TRADUZIR---
{title}

{content}
---FIM DO TEXTO A TRADUZIR---

Forneça APENAS o texto traduzido, sem nenhum comentário, explicação ou formatação adicional.
"""


def build_prompt(chapter: Chapter, job: Job) -> TranslationPrompt:
    """
    Construye el payload completo para un capítulo.
    Función pura: mismas entradas → mismos bytes.
    """
    return TranslationPrompt(
        system_instruction = build_system_instruction(job),
        user_prompt        = build_user_prompt(chapter, job),
    )


def build_system_instruction(job: Job) -> str:
    """
    Voz del perfil + regla de diminutivos en el par afinado;
    voz genérica en cualquier otro par. La regla de terceros idiomas va siempre.
    """
    third_language = _THIRD_LANGUAGE_RULE.format(
        source_lang = job.source_language,
        target_lang = job.target_language,
    )

    if is_specialized_pair(job.source_language, job.target_language):
        return _PROFILE_VOICES[job.profile] + _DIMINUTIVE_RULE + third_language

    generic = _GENERIC_VOICE.format(
        source_lang = job.source_language,
        target_lang = job.target_language,
    )
    return generic + third_language


def build_user_prompt(chapter: Chapter, job: Job) -> str:
    return _USER_PROMPT.format(
        context_block  = _format_context(job.context),
        chapter_notice = _MULTI_CHAPTER_NOTICE if job.chapter_count > 1 else _SINGLE_TEXT_NOTICE,
        source_lang    = job.source_language,
        target_lang    = job.target_language,
        title          = chapter.title,
        content        = chapter.original_text,
    )


def _format_context(context: str) -> str:
    if not context or not context.strip():
        return ""
    return _CONTEXT_BLOCK.format(context=context)
