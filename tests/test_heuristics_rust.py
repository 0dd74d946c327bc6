from __future__ import annotations

import pytest

from heuristics.base import Pattern
from heuristics.rust import RustPatternChecker

CHECKER = RustPatternChecker()

OBSERVER_CHANNEL = """
use std::sync::mpsc::Sender;

pub struct Bus {
    tx: Sender<Event>,
}
"""

OBSERVER_CALLBACK = """
pub struct Button {
    handlers: Vec<Box<dyn Fn(&Click) + Send>>,
}
"""

OBSERVER_TRAIT = """
pub trait Listener {
    fn on_event(&self, event: &Event);
}
"""

STRATEGY = """
pub trait Compressor {
    fn compress(&self, input: &[u8]) -> Vec<u8>;
}

pub struct Gzip;

impl Compressor for Gzip {
    fn compress(&self, input: &[u8]) -> Vec<u8> {
        input.to_vec()
    }
}
"""

FACADE_REEXPORT = """
mod engine;

pub use engine::Engine;
"""

FACADE_MODULES = """
pub mod reader;
pub mod writer;
"""

BUILDER_BUILD = """
pub struct RequestBuilder {
    url: String,
}

impl RequestBuilder {
    pub fn build(self) -> Request {
        Request { url: self.url }
    }
}
"""

BUILDER_CHAIN = """
pub struct Query {
    limit: usize,
    offset: usize,
}

impl Query {
    pub fn limit(mut self, n: usize) -> Self {
        self.limit = n;
        self
    }

    pub fn offset(mut self, n: usize) -> Query {
        self.offset = n;
        self
    }
}
"""

FACTORY_BOXED = """
pub fn backend_for(name: &str) -> Box<dyn Backend> {
    Box::new(Memory::default())
}
"""

FACTORY_IMPL_TRAIT = """
pub fn shapes() -> impl Iterator<Item = u32> {
    0..3
}
"""

FACTORY_NAMED = """
pub fn create_pool(size: usize) -> Pool {
    Pool::with_capacity(size)
}
"""

ADAPTER = """
pub struct LegacyAdapter {
    inner: LegacyClient,
}

impl Client for LegacyAdapter {
    fn send(&self, msg: &str) {
        self.inner.transmit(msg);
    }
}
"""

DECORATOR = """
pub struct Logging {
    inner: Box<dyn Handler>,
}

impl Handler for Logging {
    fn handle(&self, req: &Request) {
        self.inner.handle(req);
    }
}
"""

SINGLETON_ONCE = """
use std::sync::OnceLock;

static CONFIG: OnceLock<Config> = OnceLock::new();
"""

SINGLETON_ACCESSOR = """
impl Registry {
    pub fn instance() -> &'static Registry {
        &REGISTRY
    }
}
"""

COMMAND = """
pub trait Command {
    fn execute(&mut self, ctx: &mut Context);
    fn undo(&mut self, ctx: &mut Context);
}
"""

PLAIN = """
pub struct Point {
    x: f64,
    y: f64,
    z: f64,
}

pub fn distance(a: &Point, b: &Point) -> f64 {
    ((a.x - b.x).powi(2) + (a.y - b.y).powi(2)).sqrt()
}
"""


@pytest.mark.parametrize(
    ("pattern", "source"),
    [
        (Pattern.OBSERVER, OBSERVER_CHANNEL),
        (Pattern.OBSERVER, OBSERVER_CALLBACK),
        (Pattern.OBSERVER, OBSERVER_TRAIT),
        (Pattern.STRATEGY, STRATEGY),
        (Pattern.FACADE, FACADE_REEXPORT),
        (Pattern.FACADE, FACADE_MODULES),
        (Pattern.BUILDER, BUILDER_BUILD),
        (Pattern.BUILDER, BUILDER_CHAIN),
        (Pattern.FACTORY, FACTORY_BOXED),
        (Pattern.FACTORY, FACTORY_IMPL_TRAIT),
        (Pattern.FACTORY, FACTORY_NAMED),
        (Pattern.ADAPTER, ADAPTER),
        (Pattern.DECORATOR, DECORATOR),
        (Pattern.SINGLETON, SINGLETON_ONCE),
        (Pattern.SINGLETON, SINGLETON_ACCESSOR),
        (Pattern.COMMAND, COMMAND),
    ],
)
def test_structural_evidence_found(pattern: Pattern, source: str) -> None:
    assert CHECKER.check(pattern, source, filename="lib.rs")


@pytest.mark.parametrize("pattern", list(Pattern))
def test_plain_data_module_shows_no_pattern(pattern: Pattern) -> None:
    assert not CHECKER.check(pattern, PLAIN, filename="point.rs")


def test_single_pub_mod_is_not_a_facade() -> None:
    assert not CHECKER.check(Pattern.FACADE, "pub mod reader;\nmod writer;\n")


def test_restricted_reexport_is_not_a_facade() -> None:
    assert not CHECKER.check(Pattern.FACADE, "pub(crate) use engine::Engine;\n")


def test_decorator_requires_wrapping_the_implemented_trait() -> None:
    source = """
pub struct Logging {
    inner: Box<dyn Store>,
}

impl Handler for Logging {
    fn handle(&self, req: &Request) {}
}
"""
    assert not CHECKER.check(Pattern.DECORATOR, source)


def test_trait_without_command_methods_is_not_a_command() -> None:
    assert not CHECKER.check(Pattern.COMMAND, OBSERVER_TRAIT)


def test_unparsable_source_yields_no_tree_evidence() -> None:
    broken = "pub trait Compressor {\n    fn compress(&self\n"

    assert not CHECKER.check(Pattern.STRATEGY, broken)
    assert not CHECKER.check(Pattern.COMMAND, broken)


def test_text_indicators_survive_parse_errors() -> None:
    broken = "use std::sync::mpsc::Receiver;\nfn listen( {\n"

    assert CHECKER.check(Pattern.OBSERVER, broken)


def test_adapter_requires_the_wrapper_to_implement_the_trait() -> None:
    source = """
pub struct Config {
    path: String,
}

pub struct Engine {
    a: u8,
    b: u8,
    c: u8,
}

impl Display for Engine {
    fn fmt(&self, f: &mut Formatter) -> Result {
        Ok(())
    }
}
"""
    assert not CHECKER.check(Pattern.ADAPTER, source)
