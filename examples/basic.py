"""
Create thumbnails for penguin.jpg and penguin.png in an S3 bucket.

Usage:
    S3_ENDPOINT=http://localhost:9000 S3_BUCKET=images \
    S3_ACCESS_KEY=... S3_SECRET_KEY=... python examples/basic.py
"""

import asyncio
import functools
import logging

from image_thumbs import AsyncStorage, ImageThumbs, S3Client, S3Config


async def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logging.getLogger('boto3').setLevel(logging.WARNING)
    logging.getLogger('botocore').setLevel(logging.WARNING)

    storage = await AsyncStorage.connect(functools.partial(S3Client, S3Config.from_env()))
    async with await ImageThumbs.new('examples/image_thumbs', storage) as thumbs:
        await thumbs.create_thumbs('penguin.jpg', '/thumbs')
        await thumbs.create_thumbs('penguin.png', '/thumbs')


if __name__ == '__main__':
    asyncio.run(main())
