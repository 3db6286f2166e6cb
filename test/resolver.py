"""
Resolver behavioral tests (pipe splitting, prefix matching, catch-all, rewrite).

Scope
- Validate split() on pipes, including the quote-blind limitation.
- Validate longest-prefix matching, alias fallback and tie-breaks.
- Validate catch-all acceptance and command-group suppression.
- Validate the single-pass rewrite hook.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import Definition, Argument, split, match, resolve


class TestSplit(TestCase):

    def testSplitsStagesAndTrims(self):
        self.assertEqual(split("foo | bar | baz"), ("foo", ["bar", "baz"]))

    def testNoPipeGivesEmptyStages(self):
        self.assertEqual(split("  list -a  "), ("list -a", []))

    def testPipeInsideQuotesStillSplits(self):
        head, stages = split('echo "a | b"')
        self.assertEqual(head, 'echo "a')
        self.assertEqual(stages, ['b"'])

    def testEmptyStagesAreKept(self):
        self.assertEqual(split("foo ||"), ("foo", ["", ""]))


class TestMatch(TestCase):

    def setUp(self):
        self.short = Definition("do things")
        self.long = Definition("do things well")
        self.listing = Definition("list", aliases=["ls"])
        self.registry = [self.short, self.long, self.listing]

    def testLongestPrefixWins(self):
        found = match("do things well extra", self.registry)
        self.assertIs(found.definition, self.long)
        self.assertEqual(found.remainder, "extra")

    def testShorterNameMatchesWhenLongerDoesNot(self):
        found = match("do things now please", self.registry)
        self.assertIs(found.definition, self.short)
        self.assertEqual(found.remainder, "now please")

    def testExactNameLeavesEmptyRemainder(self):
        found = match("do things well", self.registry)
        self.assertIs(found.definition, self.long)
        self.assertEqual(found.remainder, "")

    def testRegistryOrderDoesNotChangeTheWinner(self):
        found = match("do things well extra", list(reversed(self.registry)))
        self.assertIs(found.definition, self.long)

    def testAliasResolvesToDefinition(self):
        found = match("ls -a", self.registry)
        self.assertIs(found.definition, self.listing)
        self.assertEqual(found.remainder, "-a")

    def testLongerAliasBeatsShorterName(self):
        commit = Definition("commit", aliases=["git ci"])
        git = Definition("git")
        found = match("git ci -m fix", [git, commit])
        self.assertIs(found.definition, commit)
        self.assertEqual(found.remainder, "-m fix")

    def testNameBeatsAliasAtSameLength(self):
        named = Definition("show")
        aliased = Definition("display", aliases=["view"])
        other = Definition("view")
        found = match("view now", [aliased, other, named])
        self.assertIs(found.definition, other)

    def testWhitespaceBetweenCommandWordsIsIgnored(self):
        found = match("do    things   well   a  b", self.registry)
        self.assertIs(found.definition, self.long)
        self.assertEqual(found.remainder, "a  b")

    def testRemainderKeepsQuotedText(self):
        say = Definition("say", arguments=[Argument("message")])
        found = match('say  "a    b"  ', [say])
        self.assertIs(found.definition, say)
        self.assertEqual(found.remainder, '"a    b"')

    def testOnlyHeadStageIsMatched(self):
        found = match("list -a | do things", self.registry)
        self.assertIs(found.definition, self.listing)
        self.assertEqual(found.remainder, "-a")

    def testNoMatchWithoutCatchAll(self):
        found = match("unknown words", self.registry)
        self.assertIsNone(found.definition)
        self.assertIsNone(found.remainder)

    def testMatchingIsDeterministic(self):
        first = match("do things well extra", self.registry)
        second = match("do things well extra", self.registry)
        self.assertEqual(first, second)


class TestCatchAll(TestCase):

    def setUp(self):
        self.well = Definition("do things well")
        self.catchall = Definition("", catchall=True, arguments=[Argument("words", variadic=True)])
        self.registry = [self.well, self.catchall]

    def testCommandGroupPrefixSuppressesCatchAll(self):
        found = match("do things", self.registry)
        self.assertIsNone(found.definition)
        self.assertIsNone(found.remainder)

    def testSingleWordGroupPrefixSuppressesCatchAll(self):
        self.assertIsNone(match("do", self.registry).definition)

    def testUnrelatedInputGoesToCatchAll(self):
        found = match("do stuff", self.registry)
        self.assertIs(found.definition, self.catchall)
        self.assertEqual(found.remainder, "do stuff")

    def testCatchAllReceivesWholeHeadStage(self):
        found = match("  anything   at all | sort", self.registry)
        self.assertIs(found.definition, self.catchall)
        self.assertEqual(found.remainder, "anything   at all")

    def testFirstCatchAllWins(self):
        second = Definition("", catchall=True)
        found = match("whatever", [self.catchall, second])
        self.assertIs(found.definition, self.catchall)

    def testSuppressionUsesCurrentInputEachCall(self):
        self.assertIs(match("do stuff", self.registry).definition, self.catchall)
        self.assertIsNone(match("do things", self.registry).definition)
        self.assertIs(match("do stuff", self.registry).definition, self.catchall)

    def testRegisteredNameStillBeatsCatchAll(self):
        found = match("do things well now", self.registry)
        self.assertIs(found.definition, self.well)
        self.assertEqual(found.remainder, "now")


class TestResolve(TestCase):

    def testResolutionCarriesPipes(self):
        listing = Definition("list")
        resolution = resolve("list -a | sort | head", [listing])
        self.assertEqual(resolution.command, "list -a")
        self.assertIs(resolution.definition, listing)
        self.assertEqual(resolution.remainder, "-a")
        self.assertEqual(resolution.pipes, ("sort", "head"))
        self.assertTrue(resolution.matched)

    def testUnmatchedResolution(self):
        resolution = resolve("nothing here", [Definition("list")])
        self.assertFalse(resolution.matched)
        self.assertIsNone(resolution.remainder)

    def testRewriteRunsOnceAndRematches(self):
        calls = []

        def expand(command, remainder):
            calls.append((command, remainder))
            return "do things " + remainder

        target = Definition("do things")
        shortcut = Definition("go", rewrite=expand)
        resolution = resolve("go now", [shortcut, target])

        self.assertEqual(calls, [("go now", "now")])
        self.assertIs(resolution.definition, target)
        self.assertEqual(resolution.command, "do things now")
        self.assertEqual(resolution.remainder, "now")

    def testRewriteIsNotAppliedTwice(self):
        calls = []

        def again(command, remainder):
            calls.append(command)
            return "loop again"

        looping = Definition("loop", rewrite=again)
        resolution = resolve("loop", [looping])

        self.assertEqual(calls, ["loop"])
        self.assertIs(resolution.definition, looping)
        self.assertEqual(resolution.remainder, "again")

    def testRewritePipesAreAppended(self):
        target = Definition("do things")
        shortcut = Definition("go", rewrite=lambda command, remainder: "do things | sort")
        resolution = resolve("go | head", [shortcut, target])
        self.assertEqual(resolution.pipes, ("head", "sort"))
        self.assertIs(resolution.definition, target)

    def testRewriteMayLeadToNoMatch(self):
        shortcut = Definition("go", rewrite=lambda command, remainder: "nowhere")
        resolution = resolve("go", [shortcut])
        self.assertIsNone(resolution.definition)
        self.assertEqual(resolution.command, "nowhere")

    def testRegistryIsNotMutated(self):
        registry = [Definition("list"), Definition("", catchall=True)]
        snapshot = list(registry)
        resolve("list", registry)
        resolve("other", registry)
        self.assertEqual(registry, snapshot)


if __name__ == "__main__":
    unittest.main()
