import asyncio
import logging

from chainsmith.chains import ChainCallOptions, LLMChainBuilder
from chainsmith.llms import MockLLM
from chainsmith.output_parsers import MarkdownParser
from chainsmith.prompts import ChatPromptTemplate

logging.basicConfig(level=logging.DEBUG)


async def main():
    prompt = ChatPromptTemplate.from_messages(
        [
            ("user", "```sql\nSELECT * FROM {table} LIMIT {limit}\n```"),
        ]
    )
    chain = (
        LLMChainBuilder()
        .prompt(prompt)
        .llm(MockLLM(chunk_size=8))
        .output_parser(MarkdownParser())
        .options(ChainCallOptions(temperature=0.2, streaming_func=print))
        .build()
    )
    args = {"table": "users", "limit": 5}

    result = await chain.call(args)
    print("parsed:", result.generation, result.tokens)
    print("raw:", await chain.invoke(args))

    stream = await chain.stream(args)
    async for item in stream:
        pass


if __name__ == "__main__":
    asyncio.run(main())
