import unittest
from textwrap import dedent

from lol_parser.lexer import tokenize, TokenType, Token, DIRECTIVES, PLAIN_CHARS
from lol_parser.errors import LexerError


class TestLolLexer(unittest.TestCase):
    """Test suite for the LOLMark lexer component."""

    def assert_tokens(self, text, expected_types):
        """Helper to verify token sequence types match expectations."""
        tokens = tokenize(text)
        actual_types = [t.type for t in tokens]
        self.assertEqual(
            actual_types,
            expected_types,
            f"\nExpected: {[t.name for t in expected_types]}"
            f"\nGot: {[t.name for t in actual_types]}",
        )

    def assert_token_values(self, text, expected_tokens):
        """Helper to verify both token types and values."""
        tokens = tokenize(text)
        self.assertEqual(
            len(tokens), len(expected_tokens), f"Number of tokens doesn't match expected: {tokens}"
        )
        for actual, (exp_type, exp_value) in zip(tokens, expected_tokens):
            self.assertEqual(
                actual.type,
                exp_type,
                f"Expected token type {exp_type.name}, got {actual.type.name}",
            )
            self.assertEqual(
                actual.value, exp_value, f"Expected value '{exp_value}', got '{actual.value}'"
            )

    def test_empty_input(self):
        """Lexer should handle empty input gracefully."""
        self.assertEqual(tokenize(""), [])

    def test_whitespace_only(self):
        """Whitespace separates tokens and never becomes one."""
        self.assertEqual(tokenize("  \t\r\n\n  "), [])

    def test_file_delimiters(self):
        self.assert_token_values(
            "#HAI #KTHXBYE",
            [(TokenType.FILE_BEGIN, "#HAI"), (TokenType.FILE_END, "#KTHXBYE")],
        )

    def test_lowercase_file_delimiters(self):
        self.assert_token_values(
            "#hai\n#kthxbye",
            [(TokenType.FILE_BEGIN, "#hai"), (TokenType.FILE_END, "#kthxbye")],
        )

    def test_every_directive_in_both_cases(self):
        """Each directive lexes from its uppercase and its lowercase spelling."""
        for spelling, token_type in DIRECTIVES.items():
            for variant in (spelling, spelling.lower()):
                with self.subTest(variant=variant):
                    tokens = tokenize(variant)
                    self.assertEqual(len(tokens), 1)
                    self.assertEqual(tokens[0].type, token_type)
                    self.assertEqual(tokens[0].value, variant)

    def test_mixed_case_directive_is_rejected(self):
        """Mixed-case spellings are not accepted; they fail at the '#'."""
        for text in ("#Hai", "#hAI", "#MAEK head", "#Gimmeh Bold"):
            with self.subTest(text=text):
                with self.assertRaises(LexerError) as ctx:
                    tokenize(text)
                self.assertEqual(ctx.exception.position, 0)
                self.assertIn("Unrecognized directive", ctx.exception.message)

    def test_directive_glued_to_word_is_rejected(self):
        with self.assertRaises(LexerError):
            tokenize("#MKAYX")

    def test_directive_followed_by_punctuation(self):
        self.assert_token_values(
            "#OIC.",
            [(TokenType.BLOCK_END, "#OIC"), (TokenType.PLAIN, ".")],
        )

    def test_longest_match_for_shared_prefixes(self):
        """Directives sharing a prefix resolve to the complete spelling."""
        self.assert_tokens(
            "#GIMMEH ITALICS #GIMMEH ITEM #I HAZ #IT IZ",
            [TokenType.ITALIC_BEGIN, TokenType.ITEM_BEGIN,
             TokenType.DECLARE_BEGIN, TokenType.DECLARE_MID],
        )

    def test_unknown_directive(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize("hello #GIMMEH CHEEZBURGER")
        self.assertEqual(ctx.exception.position, 6)
        self.assertIn("#GIMMEH", ctx.exception.message)

    def test_plain_text_words(self):
        """Plain text splits into one token per whitespace-separated word."""
        self.assert_token_values(
            'Hello, world! 42% "yes?" a/b:c',
            [
                (TokenType.PLAIN, "Hello,"),
                (TokenType.PLAIN, "world!"),
                (TokenType.PLAIN, "42%"),
                (TokenType.PLAIN, '"yes?"'),
                (TokenType.PLAIN, "a/b:c"),
            ],
        )

    def test_unsupported_character(self):
        """Characters outside the plain set fail at their own offset."""
        with self.assertRaises(LexerError) as ctx:
            tokenize("a<b")
        self.assertEqual(ctx.exception.position, 1)
        self.assertEqual(ctx.exception.column, 2)
        self.assertIn("'<'", ctx.exception.message)

    def test_uppercase_letter_gap(self):
        """Uppercase S, T, U, V and W are not plain characters; lowercase forms are."""
        for letter in "STUVW":
            with self.subTest(letter=letter):
                self.assertNotIn(letter, PLAIN_CHARS)
                self.assertIn(letter.lower(), PLAIN_CHARS)
                with self.assertRaises(LexerError) as ctx:
                    tokenize(f"ok {letter}ay")
                self.assertEqual(ctx.exception.position, 3)

        for letter in "ABCDEFGHIJKLMNOPQRXYZ":
            self.assertIn(letter, PLAIN_CHARS)

    def test_sound_url(self):
        self.assert_token_values(
            "http://www.example.com/song.mp3",
            [
                (TokenType.URL_ROOT, "http://www."),
                (TokenType.PLAIN, "example.com/song"),
                (TokenType.MP3_SUFFIX, ".mp3"),
            ],
        )

    def test_sound_url_uppercase_suffix(self):
        self.assert_token_values(
            "http://www.a.MP3",
            [
                (TokenType.URL_ROOT, "http://www."),
                (TokenType.PLAIN, "a"),
                (TokenType.MP3_SUFFIX, ".MP3"),
            ],
        )

    def test_suffix_positions(self):
        tokens = tokenize("http://www.example.com/song.mp3")
        self.assertEqual(tokens[1].position, 11)
        self.assertEqual(tokens[2].position, 27)
        self.assertEqual(tokens[2].column, 28)

    def test_youtube_root_wins_over_generic_root(self):
        self.assert_token_values(
            "http://www.youtube.com/embed/abc123",
            [
                (TokenType.YOUTUBE_ROOT, "http://www.youtube.com"),
                (TokenType.PLAIN, "/embed/abc123"),
            ],
        )

    def test_youtube_body_keeps_mp3_text(self):
        self.assert_tokens(
            "http://www.youtube.com/a.mp3",
            [TokenType.YOUTUBE_ROOT, TokenType.PLAIN],
        )

    def test_mp3_in_ordinary_text_stays_plain(self):
        self.assert_token_values("track.mp3", [(TokenType.PLAIN, "track.mp3")])

    def test_plain_run_stops_at_url_root(self):
        self.assert_tokens(
            "seehttp://www.x.mp3",
            [TokenType.PLAIN, TokenType.URL_ROOT, TokenType.PLAIN, TokenType.MP3_SUFFIX],
        )

    def test_declaration_sequence(self):
        self.assert_token_values(
            "#I HAZ x #IT IZ 5 #MKAY #LEMME SEE x #MKAY",
            [
                (TokenType.DECLARE_BEGIN, "#I HAZ"),
                (TokenType.PLAIN, "x"),
                (TokenType.DECLARE_MID, "#IT IZ"),
                (TokenType.PLAIN, "5"),
                (TokenType.MKAY_END, "#MKAY"),
                (TokenType.ACCESS_BEGIN, "#LEMME SEE"),
                (TokenType.PLAIN, "x"),
                (TokenType.MKAY_END, "#MKAY"),
            ],
        )

    def test_line_and_column_tracking(self):
        text = dedent("""
            #HAI
              hello
            #KTHXBYE
        """).strip()
        tokens = tokenize(text)
        self.assertEqual(tokens[1], Token(TokenType.PLAIN, "hello", 7, 2, 3))
        self.assertEqual((tokens[2].line, tokens[2].column), (3, 1))

    def test_error_location_on_later_line(self):
        with self.assertRaises(LexerError) as ctx:
            tokenize("#HAI\n<")
        error = ctx.exception
        self.assertEqual((error.position, error.line, error.column), (5, 2, 1))
        self.assertIn("at line 2, column 1", str(error))


if __name__ == "__main__":
    unittest.main()
