"""Rendering of output, conditionals and loops across both tag syntaxes."""

from __future__ import annotations

import pytest

from motif import DictLoader, Environment, Markup, TemplateRuntimeError


def render(env: Environment, source: str, **context) -> str:
    return env.from_string(source).render(context)


class TestDocumentedExamples:
    def test_variable_is_escaped(self, env: Environment) -> None:
        assert render(env, "Hello {{name}}!", name="<b>Bo</b>") == "Hello &lt;b&gt;Bo&lt;/b&gt;!"

    def test_each_with_this(self, env: Environment) -> None:
        assert render(env, "{{#each items}}{{this}}-{{/each}}", items=[1, 2, 3]) == "1-2-3-"

    def test_false_condition_renders_nothing(self, env: Environment) -> None:
        assert render(env, "{{#if flag}}yes{{/if}}", flag=False) == ""

    def test_frontmatter_layout(self) -> None:
        env = Environment(loader=DictLoader(layouts={"base": "<main>{{{ content }}}</main>"}))
        result = env.parse("---\nlayout: base\n---\nBODY")
        assert result.metadata.layout == "base"
        assert env.render(result) == "<main>BODY</main>"


class TestOutput:
    def test_plain_text_unchanged(self, env: Environment) -> None:
        source = "<p class='x'>Just text, 100% static.</p>\n"
        assert render(env, source) == source

    def test_triple_braces_are_raw(self, env: Environment) -> None:
        assert render(env, "{{{ html }}}", html="<b>hi</b>") == "<b>hi</b>"

    def test_markup_is_not_escaped_twice(self, env: Environment) -> None:
        assert render(env, "{{ html }}", html=Markup("<b>hi</b>")) == "<b>hi</b>"

    def test_quotes_and_ampersands_escaped(self, env: Environment) -> None:
        assert render(env, "{{ v }}", v="a & \"b\" 'c'") == "a &amp; &quot;b&quot; &#39;c&#39;"

    def test_unresolved_variable_is_empty(self, env: Environment) -> None:
        assert render(env, "[{{ missing }}][{{ user.missing.deep }}]", user={}) == "[][]"

    def test_dot_paths(self, env: Environment) -> None:
        ctx = {"user": {"name": "Ada", "tags": ["math", "code"]}}
        assert render(env, "{{ user.name }} {{ user.tags.1 }} {{ user.tags.length }}", **ctx) == "Ada code 2"

    def test_object_attributes(self, env: Environment) -> None:
        class User:
            name = "Grace"
            _secret = "hidden"

        assert render(env, "{{ u.name }}{{ u._secret }}", u=User()) == "Grace"

    def test_value_stringification(self, env: Environment) -> None:
        out = render(env, "{{ a }}|{{ b }}|{{ c }}|{{ d }}|{{ e }}", a=True, b=None, c=3.0, d=[1, 2], e=0)
        assert out == "true||3|1,2|0"

    def test_globals_sit_beneath_context(self) -> None:
        env = Environment(loader=DictLoader(), globals={"site": "motif", "year": 2024})
        assert render(env, "{{ site }} {{ year }}", year=2025) == "motif 2025"

    def test_context_is_not_mutated(self, env: Environment) -> None:
        ctx = {"items": [{"name": "a"}, {"name": "b"}], "name": "outer"}
        snapshot = {"items": [{"name": "a"}, {"name": "b"}], "name": "outer"}
        env.from_string("{{#each items}}{{ name }}{{/each}}{{ name }}").render(ctx)
        assert ctx == snapshot


class TestHelpers:
    def test_builtin_helper_call(self, env: Environment) -> None:
        assert render(env, "{{ upper name }}", name="bo") == "BO"

    def test_helper_arguments(self, env: Environment) -> None:
        assert render(env, '{{ truncate body 5 "…" }}', body="Hello world") == "Hello…"

    def test_helper_result_is_escaped(self, env: Environment) -> None:
        env.register_helper("tag", lambda name: f"<{name}>")
        assert render(env, '{{ tag "em" }}') == "&lt;em&gt;"
        assert render(env, '{{{ tag "em" }}}') == "<em>"

    def test_helper_returning_markup(self, env: Environment) -> None:
        env.register_helper("bold", lambda text: Markup(f"<b>{text}</b>"))
        assert render(env, '{{ bold "x" }}') == "<b>x</b>"

    def test_literal_arguments(self, env: Environment) -> None:
        env.register_helper("show", lambda *args: repr(args))
        out = env.from_string("{{{ show 'a' 2 -3 1.5 true null missing }}}").render()
        assert out == "('a', 2, -3, 1.5, True, None, None)"

    def test_context_shadows_literal_words(self, env: Environment) -> None:
        env.register_helper("show", lambda value: repr(value))
        assert render(env, "{{{ show true }}}", true="yes") == "'yes'"

    def test_logic_helpers(self, env: Environment) -> None:
        assert render(env, '{{ when flag "on" "off" }}', flag=True) == "on"
        assert render(env, "{{ eq count 3 }}", count=3) == "true"
        assert render(env, '{{ default missing "n/a" }}') == "n/a"

    def test_unknown_helper_is_silent(self, env: Environment) -> None:
        assert render(env, "a{{ nope x }}b") == "ab"

    def test_unknown_helper_debug_comment(self, debug_env: Environment) -> None:
        out = render(debug_env, "a{{ nope x }}b")
        assert out == "a<!-- motif M-RUN-001: Helper 'nope' not found -->b"

    def test_raising_helper_does_not_abort(self, env: Environment) -> None:
        def boom(_):
            raise ValueError("bad input")

        env.register_helper("boom", boom)
        assert render(env, "a{{ boom 1 }}b{{ x }}", x="c") == "abc"

    def test_raising_helper_debug_comment(self, debug_env: Environment, caplog) -> None:
        def boom(_):
            raise ValueError("bad input")

        debug_env.register_helper("boom", boom)
        out = render(debug_env, "{{ boom 1 }}")
        assert out.startswith("<!-- motif M-RUN-002: Helper 'boom' raised ValueError: bad input")
        assert "Helper 'boom' raised ValueError" in caplog.text

    def test_filter_name_usable_as_helper(self, env: Environment) -> None:
        env.register_filter("shout", lambda s: f"{s}!")
        assert render(env, '{{ shout "hey" }}') == "hey!"


class TestFilters:
    def test_single_filter(self, env: Environment) -> None:
        assert render(env, "{{ name | upper }}", name="ada") == "ADA"

    def test_filter_chain(self, env: Environment) -> None:
        assert render(env, "{{ title | truncate 5 | upper }}", title="Hello world") == "HELLO..."

    def test_filter_arguments(self, env: Environment) -> None:
        assert render(env, '{{ price | currency "EUR" }}', price=1234.5) == "€1,234.50"

    def test_filter_after_helper(self, env: Environment) -> None:
        assert render(env, '{{ replace name "a" "o" | upper }}', name="banana") == "BONONO"

    def test_escape_filter_not_double_escaped(self, env: Environment) -> None:
        assert render(env, "{{ html | escape }}", html="<b>") == "&lt;b&gt;"

    def test_pipe_inside_quotes(self, env: Environment) -> None:
        assert render(env, '{{ parts | join " | " }}', parts=["a", "b"]) == "a | b"

    def test_helper_name_usable_as_filter(self, env: Environment) -> None:
        assert render(env, "{{ name | slugify }}", name="Hello, World!") == "hello-world"

    def test_unknown_filter(self, env: Environment, debug_env: Environment) -> None:
        assert render(env, "{{ name | nope }}", name="x") == ""
        out = render(debug_env, "{{ name | nope }}", name="x")
        assert out == "<!-- motif M-RUN-003: Filter 'nope' not found -->"

    def test_raising_filter(self, debug_env: Environment) -> None:
        debug_env.register_filter("explode", lambda value: 1 / 0)
        out = render(debug_env, "{{ n | explode }}after", n=1)
        assert "M-RUN-004" in out
        assert out.endswith("after")


class TestConditionals:
    @pytest.mark.parametrize("value", [None, False, 0, 0.0, "", [], ()])
    def test_falsy_values(self, env: Environment, value) -> None:
        assert render(env, "{{#if v}}yes{{/if}}", v=value) == ""

    @pytest.mark.parametrize("value", [True, 1, -1, "0", "x", [0], {}, {"a": 1}])
    def test_truthy_values(self, env: Environment, value) -> None:
        assert render(env, "{{#if v}}yes{{/if}}", v=value) == "yes"

    def test_missing_condition_is_false(self, env: Environment) -> None:
        assert render(env, "{{#if user.admin}}admin{{/if}}", user={}) == ""

    def test_nested_blocks(self, env: Environment) -> None:
        source = "{{#if a}}A{{#if b}}B{{/if}}{{/if}}"
        assert render(env, source, a=True, b=False) == "A"
        assert render(env, source, a=True, b=True) == "AB"

    def test_angle_if_strips_parentheses(self, env: Environment) -> None:
        assert render(env, "<% if (show) %>shown<% endif %>", show=1) == "shown"


class TestLoops:
    def test_mapping_items_expose_keys(self, env: Environment) -> None:
        users = [{"name": "Ada"}, {"name": "Bo"}]
        assert render(env, "{{#each users}}{{ name }};{{/each}}", users=users) == "Ada;Bo;"

    def test_default_alias(self, env: Environment) -> None:
        assert render(env, "{{#each xs}}{{ item }}{{/each}}", xs="a b".split()) == "ab"

    @pytest.mark.parametrize("header", ["{{#each users as u}}", "{{#each users as |u|}}"])
    def test_explicit_alias(self, env: Environment, header: str) -> None:
        source = header + "{{ u.name }},{{/each}}"
        assert render(env, source, users=[{"name": "A"}, {"name": "B"}]) == "A,B,"

    def test_loop_variables(self, env: Environment) -> None:
        source = "{{#each xs}}{{@index}}:{{@first}}:{{@last}}:{{@length}} {{/each}}"
        assert render(env, source, xs=["a", "b"]) == "0:true:false:2 1:false:true:2 "

    def test_outer_context_visible(self, env: Environment) -> None:
        assert render(env, "{{#each xs}}{{ sep }}{{ this }}{{/each}}", xs=[1, 2], sep="/") == "/1/2"

    def test_nested_loops(self, env: Environment) -> None:
        source = "{{#each rows as row}}[{{#each row as cell}}{{ cell }}{{/each}}]{{/each}}"
        assert render(env, source, rows=[[1, 2], [3]]) == "[12][3]"

    @pytest.mark.parametrize("value", [[], (), None, "abc", {"a": 1}, 5])
    def test_empty_or_non_sequence(self, env: Environment, value) -> None:
        assert render(env, "{{#each xs}}x{{/each}}", xs=value) == ""

    def test_angle_for(self, env: Environment) -> None:
        source = "<% for p in posts %><%= p.title %>,<% endfor %>"
        assert render(env, source, posts=[{"title": "<A>"}, {"title": "B"}]) == "&lt;A&gt;,B,"


class TestMixedSyntax:
    def test_all_syntaxes_in_one_template(self) -> None:
        env = Environment(loader=DictLoader(components={"Tag": "<span>{{ label }}</span>"}))
        source = (
            "<ul><% for t in tags %><li>{{ t }}</li><% endfor %></ul>"
            "{{#if featured}}<Tag label=\"hot\"/>{{/if}}<%- raw %>"
        )
        out = env.from_string(source).render(tags=["a", "b"], featured=True, raw="<hr>")
        assert out == '<ul><li>a</li><li>b</li></ul><span>hot</span><hr>'

    def test_comments_render_nothing(self, env: Environment) -> None:
        assert render(env, "a{{! note }}b{{!-- x }} y --}}c<%# z %>d") == "abcd"


class TestRenderApi:
    def test_render_kwargs_and_dict(self, env: Environment) -> None:
        template = env.from_string("{{ a }}{{ b }}")
        assert template.render({"a": 1}, b=2) == "12"

    def test_render_rejects_extra_positionals(self, env: Environment) -> None:
        with pytest.raises(TypeError):
            env.from_string("x").render({}, {})

    def test_render_rejects_source_text(self, env: Environment) -> None:
        with pytest.raises(TypeError, match="from_string"):
            env.render("{{ x }}")

    def test_render_node_sequence(self, env: Environment) -> None:
        nodes = env.parse("Hi {{ who }}").nodes
        assert env.render(nodes, {"who": "there"}) == "Hi there"

    @pytest.mark.asyncio
    async def test_sync_render_inside_event_loop_raises(self, env: Environment) -> None:
        template = env.from_string("x", name="page")
        with pytest.raises(TemplateRuntimeError, match="running event loop") as excinfo:
            template.render()
        assert excinfo.value.template_name == "page"
        assert await template.render_async() == "x"
